from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends

from devflow.api.deps import get_database, get_revalidator, get_vote_repo
from devflow.api.errors import raise_for_errors
from devflow.api.schemas import VoteRequest
from devflow.components.answers import (
    AnswerVoteInput,
    run_downvote_answer,
    run_upvote_answer,
)
from devflow.domain.entities import VoteTally

router = APIRouter()


def _vote_input(answer_id: UUID, req: VoteRequest) -> AnswerVoteInput:
    return AnswerVoteInput(
        answer_id=answer_id,
        user_id=req.user_id,
        has_upvoted=req.has_upvoted,
        has_downvoted=req.has_downvoted,
        path=req.path,
    )


@router.post("/{answer_id}/upvote", response_model=VoteTally)
def upvote_answer(
    answer_id: UUID,
    req: VoteRequest,
    votes: Any = Depends(get_vote_repo),
    db: Any = Depends(get_database),
    revalidator: Any = Depends(get_revalidator),
) -> VoteTally:
    result = run_upvote_answer(
        _vote_input(answer_id, req), votes=votes, uow=db, revalidator=revalidator
    )
    if not result.success or result.tally is None:
        raise_for_errors(result.errors)
    return result.tally


@router.post("/{answer_id}/downvote", response_model=VoteTally)
def downvote_answer(
    answer_id: UUID,
    req: VoteRequest,
    votes: Any = Depends(get_vote_repo),
    db: Any = Depends(get_database),
    revalidator: Any = Depends(get_revalidator),
) -> VoteTally:
    result = run_downvote_answer(
        _vote_input(answer_id, req), votes=votes, uow=db, revalidator=revalidator
    )
    if not result.success or result.tally is None:
        raise_for_errors(result.errors)
    return result.tally
