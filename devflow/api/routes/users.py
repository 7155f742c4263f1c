from typing import Any

from fastapi import APIRouter, Depends

from devflow.api.deps import (
    get_answer_repo,
    get_clock,
    get_question_repo,
    get_rules,
    get_user_repo,
    get_viewer_clerk_id,
)
from devflow.api.errors import raise_for_errors
from devflow.api.schemas import ProfileResponse, UserCreateRequest, UserInfoResponse
from devflow.components.users import (
    CreateUserInput,
    GetUserInfoInput,
    ProfileInput,
    run_create_user,
    run_get_profile,
    run_get_user_info,
)
from devflow.domain.entities import User
from devflow.rules.models import Rules

router = APIRouter()


@router.post("", response_model=User, status_code=201)
def create_user(
    req: UserCreateRequest,
    users: Any = Depends(get_user_repo),
    clock: Any = Depends(get_clock),
) -> User:
    """Mirror a user from the identity provider."""
    result = run_create_user(CreateUserInput(**req.model_dump()), users=users, time=clock)
    if not result.success or result.user is None:
        raise_for_errors(result.errors)
    return result.user


@router.get("/{clerk_id}/profile", response_model=ProfileResponse)
def get_profile(
    clerk_id: str,
    page: int = 1,
    viewer: str | None = Depends(get_viewer_clerk_id),
    users: Any = Depends(get_user_repo),
    questions: Any = Depends(get_question_repo),
    answers: Any = Depends(get_answer_repo),
    rules: Rules = Depends(get_rules),
) -> ProfileResponse:
    """Profile header, stats and one page each of questions and answers."""
    inp = ProfileInput(
        clerk_id=clerk_id,
        viewer_clerk_id=viewer,
        page=page,
        page_size=rules.pagination.page_size,
    )
    result = run_get_profile(inp, users=users, questions=questions, answers=answers)
    if not result.success or result.user is None:
        raise_for_errors(result.errors)

    return ProfileResponse(
        user=result.user,
        total_questions=result.total_questions,
        total_answers=result.total_answers,
        questions=result.questions,
        answers=result.answers,
        questions_is_next=result.questions_is_next,
        answers_is_next=result.answers_is_next,
        can_edit=result.can_edit,
        page=result.page,
    )


@router.get("/{clerk_id}", response_model=UserInfoResponse)
def get_user_info(
    clerk_id: str,
    users: Any = Depends(get_user_repo),
    questions: Any = Depends(get_question_repo),
    answers: Any = Depends(get_answer_repo),
) -> UserInfoResponse:
    result = run_get_user_info(
        GetUserInfoInput(clerk_id=clerk_id), users=users, questions=questions, answers=answers
    )
    if not result.success or result.user is None:
        raise_for_errors(result.errors)
    return UserInfoResponse(
        user=result.user,
        total_questions=result.total_questions,
        total_answers=result.total_answers,
    )
