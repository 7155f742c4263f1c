"""
Voting component - up/down votes on questions and answers.

A user holds at most one vote per entity. Voting in a direction the user
already voted cancels that vote; otherwise the vote is set to the new
direction, replacing an opposite vote.
"""

from __future__ import annotations

import logging
from contextlib import nullcontext
from typing import Literal

from devflow.core.errors import DevflowError, NotFoundError

from .models import VoteError, VoteInput, VoteOutput
from .ports import UnitOfWorkPort, VoteRepoPort

logger = logging.getLogger(__name__)

VoteAction = Literal["cancel", "set"]


def decide_vote_action(inp: VoteInput) -> VoteAction:
    """Cancel when re-voting the same direction, else set the vote."""
    already = inp.has_upvoted if inp.direction == "up" else inp.has_downvoted
    return "cancel" if already else "set"


def run_vote(
    inp: VoteInput,
    votes: VoteRepoPort,
    uow: UnitOfWorkPort | None = None,
) -> VoteOutput:
    """Apply a vote and return the entity's updated tally."""
    try:
        with uow.transaction() if uow else nullcontext():
            if not votes.entity_exists(inp.entity_type, inp.entity_id):
                raise NotFoundError(f"{inp.entity_type.capitalize()} not found")

            if decide_vote_action(inp) == "cancel":
                votes.clear_vote(inp.entity_type, inp.entity_id, inp.user_id)
            else:
                votes.set_vote(inp.entity_type, inp.entity_id, inp.user_id, inp.direction)

            tally = votes.tally(inp.entity_type, inp.entity_id)
    except NotFoundError as e:
        logger.warning("Vote rejected: %s (%s)", e.message, inp.entity_id)
        return VoteOutput(errors=[VoteError(code=e.code, message=e.message)], success=False)
    except DevflowError as e:
        logger.exception("Vote on %s %s failed", inp.entity_type, inp.entity_id)
        return VoteOutput(errors=[VoteError(code=e.code, message=e.message)], success=False)

    return VoteOutput(tally=tally)
