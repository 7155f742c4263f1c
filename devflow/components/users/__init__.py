"""
Users component - user records and the profile page aggregate.
"""

from .component import run_create_user, run_get_profile, run_get_user_info
from .models import (
    CreateUserInput,
    GetUserInfoInput,
    ProfileInput,
    ProfileOutput,
    UserError,
    UserInfoOutput,
    UserOutput,
)

__all__ = [
    "run_create_user",
    "run_get_profile",
    "run_get_user_info",
    "CreateUserInput",
    "GetUserInfoInput",
    "ProfileInput",
    "ProfileOutput",
    "UserError",
    "UserInfoOutput",
    "UserOutput",
]
