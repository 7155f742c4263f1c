"""
Questions component - asking, reading, editing, deleting and voting on
questions.

Every mutating entry point runs its store writes in one transaction and,
once committed, asks the revalidator to refresh the caller's page path.
Failures come back as ``success=False`` with a single ``QuestionError``;
nothing is raised to the caller and nothing is silently dropped.

Tag resolution on create is sequential: each name is matched to an
existing tag case-insensitively or created, and the question is linked to
it. A name repeated in different casings resolves to the same tag and is
attached once.
"""

from __future__ import annotations

import logging
from uuid import UUID

from devflow.components.voting import VoteInput, run_vote
from devflow.core.errors import DevflowError, NotFoundError
from devflow.domain.entities import (
    AuthorRef,
    Interaction,
    Question,
    QuestionDetail,
    QuestionWithRelations,
    TagRef,
    VoteDirection,
)

from .models import (
    CreateQuestionInput,
    DeleteQuestionInput,
    EditQuestionInput,
    GetQuestionInput,
    QuestionError,
    QuestionListOutput,
    QuestionOperationOutput,
    QuestionOutput,
    QuestionVoteInput,
    ViewQuestionInput,
)
from .ports import (
    AnswerRepoPort,
    InteractionRepoPort,
    QuestionRepoPort,
    RevalidatorPort,
    TagRepoPort,
    TimePort,
    UnitOfWorkPort,
    UserRepoPort,
    VoteRepoPort,
)

logger = logging.getLogger(__name__)


def _error(e: DevflowError, action: str) -> QuestionError:
    if isinstance(e, NotFoundError):
        logger.warning("%s: %s", action, e.message)
    else:
        logger.exception("%s failed", action)
    return QuestionError(code=e.code, message=e.message)


def _require_question(questions: QuestionRepoPort, question_id: UUID) -> Question:
    question = questions.get_by_id(question_id)
    if question is None:
        raise NotFoundError("Question not found")
    return question


# --- Reads ---


def run_get_questions(
    *,
    questions: QuestionRepoPort,
    tags: TagRepoPort,
    users: UserRepoPort,
) -> QuestionListOutput:
    """All questions, newest first, with full tag and author records."""
    try:
        items = questions.list_all()
        tag_by_id = {t.id: t for t in tags.get_many([t for q in items for t in q.tag_ids])}
        user_by_id = {u.id: u for u in users.get_many([q.author_id for q in items])}
    except DevflowError as e:
        return QuestionListOutput(errors=[_error(e, "Get questions")], success=False)

    populated = [
        QuestionWithRelations(
            **q.model_dump(),
            tags=[tag_by_id[t] for t in q.tag_ids if t in tag_by_id],
            author=user_by_id.get(q.author_id),
        )
        for q in items
    ]
    return QuestionListOutput(questions=populated)


def run_get_question(
    inp: GetQuestionInput,
    *,
    questions: QuestionRepoPort,
    tags: TagRepoPort,
    users: UserRepoPort,
) -> QuestionOutput:
    """One question with tag (id, name) and author (id, name, picture, clerk_id)."""
    try:
        question = questions.get_by_id(inp.question_id)
        if question is None:
            return QuestionOutput(question=None)
        question_tags = tags.get_many(question.tag_ids)
        author = users.get_by_id(question.author_id)
    except DevflowError as e:
        return QuestionOutput(errors=[_error(e, "Get question")], success=False)

    detail = QuestionDetail(
        **question.model_dump(),
        tags=[TagRef(id=t.id, name=t.name) for t in question_tags],
        author=(
            AuthorRef(
                id=author.id,
                name=author.name,
                picture=author.picture,
                clerk_id=author.clerk_id,
            )
            if author
            else None
        ),
    )
    return QuestionOutput(question=detail)


# --- Writes ---


def run_create_question(
    inp: CreateQuestionInput,
    *,
    questions: QuestionRepoPort,
    tags: TagRepoPort,
    uow: UnitOfWorkPort,
    revalidator: RevalidatorPort,
    time: TimePort,
    interactions: InteractionRepoPort | None = None,
) -> QuestionOperationOutput:
    """Insert the question, resolve its tags one by one, then link them."""
    question = Question(
        title=inp.title,
        content=inp.content,
        author_id=inp.author_id,
        created_at=time.now_utc(),
    )
    try:
        with uow.transaction():
            questions.insert(question)

            tag_ids: list[UUID] = []
            for name in inp.tags:
                tag = tags.find_or_create(name, question.id)
                if tag.id not in tag_ids:
                    tag_ids.append(tag.id)

            questions.add_tags(question.id, tag_ids)
            question.tag_ids = tag_ids

            if interactions is not None:
                interactions.save(
                    Interaction(
                        user_id=inp.author_id,
                        action="ask_question",
                        question_id=question.id,
                        tag_ids=tag_ids,
                        created_at=question.created_at,
                    )
                )
    except DevflowError as e:
        return QuestionOperationOutput(errors=[_error(e, "Create question")], success=False)

    revalidator.revalidate(inp.path)
    return QuestionOperationOutput(question=question)


def run_edit_question(
    inp: EditQuestionInput,
    *,
    questions: QuestionRepoPort,
    uow: UnitOfWorkPort,
    revalidator: RevalidatorPort,
) -> QuestionOperationOutput:
    """Overwrite title and content; other fields are left untouched."""
    try:
        with uow.transaction():
            question = _require_question(questions, inp.question_id)
            questions.update_text(question.id, inp.title, inp.content)
            question.title = inp.title
            question.content = inp.content
    except DevflowError as e:
        return QuestionOperationOutput(errors=[_error(e, "Edit question")], success=False)

    revalidator.revalidate(inp.path)
    return QuestionOperationOutput(question=question)


def run_delete_question(
    inp: DeleteQuestionInput,
    *,
    questions: QuestionRepoPort,
    answers: AnswerRepoPort,
    interactions: InteractionRepoPort,
    tags: TagRepoPort,
    votes: VoteRepoPort,
    uow: UnitOfWorkPort,
    revalidator: RevalidatorPort,
) -> QuestionOperationOutput:
    """Delete the question with its answers, interactions, votes and tag links."""
    try:
        with uow.transaction():
            question = _require_question(questions, inp.question_id)
            questions.delete(question.id)
            answers.delete_by_question(question.id)
            interactions.delete_by_question(question.id)
            tags.unlink_question(question.id)
            votes.delete_for("question", question.id)
    except DevflowError as e:
        return QuestionOperationOutput(errors=[_error(e, "Delete question")], success=False)

    revalidator.revalidate(inp.path)
    return QuestionOperationOutput(question=question)


def _run_question_vote(
    inp: QuestionVoteInput,
    direction: VoteDirection,
    votes: VoteRepoPort,
    uow: UnitOfWorkPort,
    revalidator: RevalidatorPort,
) -> QuestionOperationOutput:
    result = run_vote(
        VoteInput(
            entity_id=inp.question_id,
            user_id=inp.user_id,
            has_upvoted=inp.has_upvoted,
            has_downvoted=inp.has_downvoted,
            entity_type="question",
            direction=direction,
        ),
        votes=votes,
        uow=uow,
    )
    if not result.success:
        return QuestionOperationOutput(
            errors=[QuestionError(code=e.code, message=e.message) for e in result.errors],
            success=False,
        )

    revalidator.revalidate(inp.path)
    return QuestionOperationOutput(tally=result.tally)


def run_upvote_question(
    inp: QuestionVoteInput,
    *,
    votes: VoteRepoPort,
    uow: UnitOfWorkPort,
    revalidator: RevalidatorPort,
) -> QuestionOperationOutput:
    return _run_question_vote(inp, "up", votes, uow, revalidator)


def run_downvote_question(
    inp: QuestionVoteInput,
    *,
    votes: VoteRepoPort,
    uow: UnitOfWorkPort,
    revalidator: RevalidatorPort,
) -> QuestionOperationOutput:
    return _run_question_vote(inp, "down", votes, uow, revalidator)


def run_view_question(
    inp: ViewQuestionInput,
    *,
    questions: QuestionRepoPort,
    interactions: InteractionRepoPort,
    uow: UnitOfWorkPort,
) -> QuestionOperationOutput:
    """Count a view; signed-in viewers also get one "view" interaction per question."""
    try:
        with uow.transaction():
            question = _require_question(questions, inp.question_id)
            questions.increment_views(question.id)
            question.views += 1

            if inp.user_id is not None:
                seen = any(
                    i.user_id == inp.user_id and i.action == "view"
                    for i in interactions.list_by_question(question.id)
                )
                if not seen:
                    interactions.save(
                        Interaction(
                            user_id=inp.user_id,
                            action="view",
                            question_id=question.id,
                            tag_ids=question.tag_ids,
                        )
                    )
    except DevflowError as e:
        return QuestionOperationOutput(errors=[_error(e, "View question")], success=False)

    return QuestionOperationOutput(question=question)
