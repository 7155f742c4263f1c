"""
Questions component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from devflow.domain.entities import (
    Question,
    QuestionDetail,
    QuestionWithRelations,
    VoteTally,
)

# --- Errors ---


@dataclass(frozen=True)
class QuestionError:
    """
    Failure reported by a question operation.

    ``code`` is one of ``not_found``, ``connection_unavailable`` or
    ``store_failure``.
    """

    code: str
    message: str


# --- Input Models ---


@dataclass(frozen=True)
class GetQuestionInput:
    question_id: UUID


@dataclass(frozen=True)
class CreateQuestionInput:
    """Input for asking a new question."""

    title: str
    content: str
    tags: list[str]
    author_id: UUID
    path: str


@dataclass(frozen=True)
class EditQuestionInput:
    question_id: UUID
    title: str
    content: str
    path: str


@dataclass(frozen=True)
class DeleteQuestionInput:
    question_id: UUID
    path: str


@dataclass(frozen=True)
class QuestionVoteInput:
    question_id: UUID
    user_id: UUID
    has_upvoted: bool
    has_downvoted: bool
    path: str


@dataclass(frozen=True)
class ViewQuestionInput:
    question_id: UUID
    user_id: UUID | None = None


# --- Output Models ---


@dataclass(frozen=True)
class QuestionListOutput:
    questions: list[QuestionWithRelations] = field(default_factory=list)
    errors: list[QuestionError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class QuestionOutput:
    """Single question; ``question`` is None when it does not exist."""

    question: QuestionDetail | None = None
    errors: list[QuestionError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class QuestionOperationOutput:
    """Output for create, edit, delete, vote and view."""

    question: Question | None = None
    tally: VoteTally | None = None
    errors: list[QuestionError] = field(default_factory=list)
    success: bool = True
