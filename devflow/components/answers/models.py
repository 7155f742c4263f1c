"""
Answers component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from devflow.domain.entities import Answer, VoteTally


@dataclass(frozen=True)
class AnswerError:
    code: str
    message: str


@dataclass(frozen=True)
class CreateAnswerInput:
    question_id: UUID
    author_id: UUID
    content: str
    path: str


@dataclass(frozen=True)
class GetAnswersInput:
    question_id: UUID


@dataclass(frozen=True)
class AnswerVoteInput:
    answer_id: UUID
    user_id: UUID
    has_upvoted: bool
    has_downvoted: bool
    path: str


@dataclass(frozen=True)
class AnswerListOutput:
    answers: list[Answer] = field(default_factory=list)
    errors: list[AnswerError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class AnswerOperationOutput:
    answer: Answer | None = None
    tally: VoteTally | None = None
    errors: list[AnswerError] = field(default_factory=list)
    success: bool = True
