"""
Voting component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from devflow.domain.entities import EntityType, VoteDirection, VoteTally


@dataclass(frozen=True)
class VoteError:
    """Voting error."""

    code: str
    message: str


@dataclass(frozen=True)
class VoteInput:
    """
    A vote cast on a question or answer.

    ``has_upvoted`` / ``has_downvoted`` describe the voter's current state as
    shown to them when they clicked.
    """

    entity_id: UUID
    user_id: UUID
    has_upvoted: bool
    has_downvoted: bool
    entity_type: EntityType
    direction: VoteDirection


@dataclass(frozen=True)
class VoteOutput:
    tally: VoteTally | None = None
    errors: list[VoteError] = field(default_factory=list)
    success: bool = True
