"""
Questions component port definitions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from devflow.ports.repo import (
    AnswerRepoPort,
    InteractionRepoPort,
    QuestionRepoPort,
    TagRepoPort,
    UnitOfWorkPort,
    UserRepoPort,
    VoteRepoPort,
)


class RevalidatorPort(Protocol):
    """Channel announcing that cached output for a path is stale."""

    def revalidate(self, path: str) -> None:
        ...


class TimePort(Protocol):
    def now_utc(self) -> datetime:
        ...


__all__ = [
    "AnswerRepoPort",
    "InteractionRepoPort",
    "QuestionRepoPort",
    "RevalidatorPort",
    "TagRepoPort",
    "TimePort",
    "UnitOfWorkPort",
    "UserRepoPort",
    "VoteRepoPort",
]
