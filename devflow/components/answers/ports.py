"""
Answers component port definitions.
"""

from __future__ import annotations

from devflow.components.questions.ports import RevalidatorPort, TimePort
from devflow.ports.repo import (
    AnswerRepoPort,
    InteractionRepoPort,
    QuestionRepoPort,
    UnitOfWorkPort,
    VoteRepoPort,
)

__all__ = [
    "AnswerRepoPort",
    "InteractionRepoPort",
    "QuestionRepoPort",
    "RevalidatorPort",
    "TimePort",
    "UnitOfWorkPort",
    "VoteRepoPort",
]
