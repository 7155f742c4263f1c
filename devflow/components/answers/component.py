"""
Answers component - posting, listing and voting on answers.
"""

from __future__ import annotations

import logging

from devflow.components.voting import VoteInput, run_vote
from devflow.core.errors import DevflowError, NotFoundError
from devflow.domain.entities import Answer, Interaction, VoteDirection

from .models import (
    AnswerError,
    AnswerListOutput,
    AnswerOperationOutput,
    AnswerVoteInput,
    CreateAnswerInput,
    GetAnswersInput,
)
from .ports import (
    AnswerRepoPort,
    InteractionRepoPort,
    QuestionRepoPort,
    RevalidatorPort,
    TimePort,
    UnitOfWorkPort,
    VoteRepoPort,
)

logger = logging.getLogger(__name__)


def run_create_answer(
    inp: CreateAnswerInput,
    *,
    questions: QuestionRepoPort,
    answers: AnswerRepoPort,
    uow: UnitOfWorkPort,
    revalidator: RevalidatorPort,
    time: TimePort,
    interactions: InteractionRepoPort | None = None,
) -> AnswerOperationOutput:
    answer = Answer(
        question_id=inp.question_id,
        author_id=inp.author_id,
        content=inp.content,
        created_at=time.now_utc(),
    )
    try:
        with uow.transaction():
            question = questions.get_by_id(inp.question_id)
            if question is None:
                raise NotFoundError("Question not found")
            answers.save(answer)
            if interactions is not None:
                interactions.save(
                    Interaction(
                        user_id=inp.author_id,
                        action="answer",
                        question_id=question.id,
                        answer_id=answer.id,
                        tag_ids=question.tag_ids,
                        created_at=answer.created_at,
                    )
                )
    except NotFoundError as e:
        logger.warning("Create answer: %s", e.message)
        return AnswerOperationOutput(
            errors=[AnswerError(code=e.code, message=e.message)], success=False
        )
    except DevflowError as e:
        logger.exception("Create answer failed")
        return AnswerOperationOutput(
            errors=[AnswerError(code=e.code, message=e.message)], success=False
        )

    revalidator.revalidate(inp.path)
    return AnswerOperationOutput(answer=answer)


def run_get_answers(inp: GetAnswersInput, *, answers: AnswerRepoPort) -> AnswerListOutput:
    """Answers to a question, oldest first."""
    try:
        items = answers.list_by_question(inp.question_id)
    except DevflowError as e:
        logger.exception("Get answers failed")
        return AnswerListOutput(errors=[AnswerError(code=e.code, message=e.message)], success=False)
    return AnswerListOutput(answers=items)


def _run_answer_vote(
    inp: AnswerVoteInput,
    direction: VoteDirection,
    votes: VoteRepoPort,
    uow: UnitOfWorkPort,
    revalidator: RevalidatorPort,
) -> AnswerOperationOutput:
    result = run_vote(
        VoteInput(
            entity_id=inp.answer_id,
            user_id=inp.user_id,
            has_upvoted=inp.has_upvoted,
            has_downvoted=inp.has_downvoted,
            entity_type="answer",
            direction=direction,
        ),
        votes=votes,
        uow=uow,
    )
    if not result.success:
        return AnswerOperationOutput(
            errors=[AnswerError(code=e.code, message=e.message) for e in result.errors],
            success=False,
        )

    revalidator.revalidate(inp.path)
    return AnswerOperationOutput(tally=result.tally)


def run_upvote_answer(
    inp: AnswerVoteInput,
    *,
    votes: VoteRepoPort,
    uow: UnitOfWorkPort,
    revalidator: RevalidatorPort,
) -> AnswerOperationOutput:
    return _run_answer_vote(inp, "up", votes, uow, revalidator)


def run_downvote_answer(
    inp: AnswerVoteInput,
    *,
    votes: VoteRepoPort,
    uow: UnitOfWorkPort,
    revalidator: RevalidatorPort,
) -> AnswerOperationOutput:
    return _run_answer_vote(inp, "down", votes, uow, revalidator)
