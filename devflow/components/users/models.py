"""
Users component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from devflow.domain.entities import Answer, Question, User


@dataclass(frozen=True)
class UserError:
    code: str
    message: str


@dataclass(frozen=True)
class CreateUserInput:
    """A user mirrored from the external identity provider."""

    clerk_id: str
    name: str
    username: str
    email: str
    picture: str = ""
    bio: str | None = None
    location: str | None = None
    portfolio_website: str | None = None


@dataclass(frozen=True)
class GetUserInfoInput:
    clerk_id: str


@dataclass(frozen=True)
class ProfileInput:
    """
    Profile page request.

    ``viewer_clerk_id`` is the signed-in viewer's external identity, or None
    for anonymous visitors.
    """

    clerk_id: str
    viewer_clerk_id: str | None = None
    page: int = 1
    page_size: int = 10


@dataclass(frozen=True)
class UserOutput:
    user: User | None = None
    errors: list[UserError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class UserInfoOutput:
    user: User | None = None
    total_questions: int = 0
    total_answers: int = 0
    errors: list[UserError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class ProfileOutput:
    user: User | None = None
    total_questions: int = 0
    total_answers: int = 0
    questions: list[Question] = field(default_factory=list)
    answers: list[Answer] = field(default_factory=list)
    questions_is_next: bool = False
    answers_is_next: bool = False
    can_edit: bool = False
    page: int = 1
    errors: list[UserError] = field(default_factory=list)
    success: bool = True
