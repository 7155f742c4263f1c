from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from devflow.api.deps import (
    get_answer_repo,
    get_clock,
    get_database,
    get_interaction_repo,
    get_question_repo,
    get_revalidator,
    get_tag_repo,
    get_user_repo,
    get_vote_repo,
)
from devflow.api.errors import raise_for_errors
from devflow.api.schemas import (
    AnswerCreateRequest,
    QuestionCreateRequest,
    QuestionUpdateRequest,
    QuestionViewRequest,
    VoteRequest,
)
from devflow.components.answers import (
    CreateAnswerInput,
    GetAnswersInput,
    run_create_answer,
    run_get_answers,
)
from devflow.components.questions import (
    CreateQuestionInput,
    DeleteQuestionInput,
    EditQuestionInput,
    GetQuestionInput,
    QuestionVoteInput,
    ViewQuestionInput,
    run_create_question,
    run_delete_question,
    run_downvote_question,
    run_edit_question,
    run_get_question,
    run_get_questions,
    run_upvote_question,
    run_view_question,
)
from devflow.domain.entities import (
    Answer,
    Question,
    QuestionDetail,
    QuestionWithRelations,
    VoteTally,
)

router = APIRouter()


@router.get("", response_model=list[QuestionWithRelations])
def list_questions(
    questions: Any = Depends(get_question_repo),
    tags: Any = Depends(get_tag_repo),
    users: Any = Depends(get_user_repo),
) -> list[QuestionWithRelations]:
    """All questions with tags and authors."""
    result = run_get_questions(questions=questions, tags=tags, users=users)
    if not result.success:
        raise_for_errors(result.errors)
    return result.questions


@router.post("", response_model=Question, status_code=201)
def create_question(
    req: QuestionCreateRequest,
    questions: Any = Depends(get_question_repo),
    tags: Any = Depends(get_tag_repo),
    interactions: Any = Depends(get_interaction_repo),
    db: Any = Depends(get_database),
    revalidator: Any = Depends(get_revalidator),
    clock: Any = Depends(get_clock),
) -> Question:
    """Ask a new question."""
    inp = CreateQuestionInput(
        title=req.title,
        content=req.content,
        tags=req.tags,
        author_id=req.author_id,
        path=req.path,
    )
    result = run_create_question(
        inp,
        questions=questions,
        tags=tags,
        uow=db,
        revalidator=revalidator,
        time=clock,
        interactions=interactions,
    )
    if not result.success or result.question is None:
        raise_for_errors(result.errors)
    return result.question


@router.get("/{question_id}", response_model=QuestionDetail)
def get_question(
    question_id: UUID,
    questions: Any = Depends(get_question_repo),
    tags: Any = Depends(get_tag_repo),
    users: Any = Depends(get_user_repo),
) -> QuestionDetail:
    result = run_get_question(
        GetQuestionInput(question_id=question_id),
        questions=questions,
        tags=tags,
        users=users,
    )
    if not result.success:
        raise_for_errors(result.errors)
    if result.question is None:
        raise HTTPException(status_code=404, detail="Question not found")
    return result.question


@router.put("/{question_id}", response_model=Question)
def edit_question(
    question_id: UUID,
    req: QuestionUpdateRequest,
    questions: Any = Depends(get_question_repo),
    db: Any = Depends(get_database),
    revalidator: Any = Depends(get_revalidator),
) -> Question:
    inp = EditQuestionInput(
        question_id=question_id, title=req.title, content=req.content, path=req.path
    )
    result = run_edit_question(inp, questions=questions, uow=db, revalidator=revalidator)
    if not result.success or result.question is None:
        raise_for_errors(result.errors)
    return result.question


@router.delete("/{question_id}", status_code=204)
def delete_question(
    question_id: UUID,
    path: str = "/",
    questions: Any = Depends(get_question_repo),
    answers: Any = Depends(get_answer_repo),
    interactions: Any = Depends(get_interaction_repo),
    tags: Any = Depends(get_tag_repo),
    votes: Any = Depends(get_vote_repo),
    db: Any = Depends(get_database),
    revalidator: Any = Depends(get_revalidator),
) -> None:
    """Delete a question and everything that hangs off it."""
    result = run_delete_question(
        DeleteQuestionInput(question_id=question_id, path=path),
        questions=questions,
        answers=answers,
        interactions=interactions,
        tags=tags,
        votes=votes,
        uow=db,
        revalidator=revalidator,
    )
    if not result.success:
        raise_for_errors(result.errors)


def _vote_input(question_id: UUID, req: VoteRequest) -> QuestionVoteInput:
    return QuestionVoteInput(
        question_id=question_id,
        user_id=req.user_id,
        has_upvoted=req.has_upvoted,
        has_downvoted=req.has_downvoted,
        path=req.path,
    )


@router.post("/{question_id}/upvote", response_model=VoteTally)
def upvote_question(
    question_id: UUID,
    req: VoteRequest,
    votes: Any = Depends(get_vote_repo),
    db: Any = Depends(get_database),
    revalidator: Any = Depends(get_revalidator),
) -> VoteTally:
    result = run_upvote_question(
        _vote_input(question_id, req), votes=votes, uow=db, revalidator=revalidator
    )
    if not result.success or result.tally is None:
        raise_for_errors(result.errors)
    return result.tally


@router.post("/{question_id}/downvote", response_model=VoteTally)
def downvote_question(
    question_id: UUID,
    req: VoteRequest,
    votes: Any = Depends(get_vote_repo),
    db: Any = Depends(get_database),
    revalidator: Any = Depends(get_revalidator),
) -> VoteTally:
    result = run_downvote_question(
        _vote_input(question_id, req), votes=votes, uow=db, revalidator=revalidator
    )
    if not result.success or result.tally is None:
        raise_for_errors(result.errors)
    return result.tally


@router.post("/{question_id}/views", response_model=Question)
def view_question(
    question_id: UUID,
    req: QuestionViewRequest,
    questions: Any = Depends(get_question_repo),
    interactions: Any = Depends(get_interaction_repo),
    db: Any = Depends(get_database),
) -> Question:
    result = run_view_question(
        ViewQuestionInput(question_id=question_id, user_id=req.user_id),
        questions=questions,
        interactions=interactions,
        uow=db,
    )
    if not result.success or result.question is None:
        raise_for_errors(result.errors)
    return result.question


# --- Answers on a question ---


@router.get("/{question_id}/answers", response_model=list[Answer])
def list_answers(
    question_id: UUID,
    answers: Any = Depends(get_answer_repo),
) -> list[Answer]:
    result = run_get_answers(GetAnswersInput(question_id=question_id), answers=answers)
    if not result.success:
        raise_for_errors(result.errors)
    return result.answers


@router.post("/{question_id}/answers", response_model=Answer, status_code=201)
def create_answer(
    question_id: UUID,
    req: AnswerCreateRequest,
    questions: Any = Depends(get_question_repo),
    answers: Any = Depends(get_answer_repo),
    interactions: Any = Depends(get_interaction_repo),
    db: Any = Depends(get_database),
    revalidator: Any = Depends(get_revalidator),
    clock: Any = Depends(get_clock),
) -> Answer:
    inp = CreateAnswerInput(
        question_id=question_id, author_id=req.author_id, content=req.content, path=req.path
    )
    result = run_create_answer(
        inp,
        questions=questions,
        answers=answers,
        uow=db,
        revalidator=revalidator,
        time=clock,
        interactions=interactions,
    )
    if not result.success or result.answer is None:
        raise_for_errors(result.errors)
    return result.answer
