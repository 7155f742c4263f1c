"""
Users component - user records and the profile page aggregate.

Users are mirrored from the external identity provider and addressed by
their ``clerk_id``. The profile aggregate combines the user record, their
question and answer totals, one page of each list, and whether the viewer
is the profile owner (and may therefore edit it).
"""

from __future__ import annotations

import logging

from devflow.core.errors import ConflictError, DevflowError, NotFoundError
from devflow.domain.entities import User

from .models import (
    CreateUserInput,
    GetUserInfoInput,
    ProfileInput,
    ProfileOutput,
    UserError,
    UserInfoOutput,
    UserOutput,
)
from .ports import AnswerRepoPort, QuestionRepoPort, TimePort, UserRepoPort

logger = logging.getLogger(__name__)


def _error(e: DevflowError, action: str) -> UserError:
    if isinstance(e, (NotFoundError, ConflictError)):
        logger.warning("%s: %s", action, e.message)
    else:
        logger.exception("%s failed", action)
    return UserError(code=e.code, message=e.message)


def _require_user(users: UserRepoPort, clerk_id: str) -> User:
    user = users.get_by_clerk_id(clerk_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def run_create_user(
    inp: CreateUserInput,
    *,
    users: UserRepoPort,
    time: TimePort,
) -> UserOutput:
    try:
        if users.get_by_clerk_id(inp.clerk_id) is not None:
            raise ConflictError("User already exists")
        user = User(
            clerk_id=inp.clerk_id,
            name=inp.name,
            username=inp.username,
            email=inp.email,
            picture=inp.picture,
            bio=inp.bio,
            location=inp.location,
            portfolio_website=inp.portfolio_website,
            joined_at=time.now_utc(),
        )
        users.save(user)
    except DevflowError as e:
        return UserOutput(errors=[_error(e, "Create user")], success=False)
    return UserOutput(user=user)


def run_get_user_info(
    inp: GetUserInfoInput,
    *,
    users: UserRepoPort,
    questions: QuestionRepoPort,
    answers: AnswerRepoPort,
) -> UserInfoOutput:
    """User record with total question and answer counts."""
    try:
        user = _require_user(users, inp.clerk_id)
        _, total_questions = questions.list_by_author(user.id, 0, 0)
        _, total_answers = answers.list_by_author(user.id, 0, 0)
    except DevflowError as e:
        return UserInfoOutput(errors=[_error(e, "Get user info")], success=False)

    return UserInfoOutput(
        user=user,
        total_questions=total_questions,
        total_answers=total_answers,
    )


def run_get_profile(
    inp: ProfileInput,
    *,
    users: UserRepoPort,
    questions: QuestionRepoPort,
    answers: AnswerRepoPort,
) -> ProfileOutput:
    page = max(inp.page, 1)
    offset = (page - 1) * inp.page_size
    try:
        user = _require_user(users, inp.clerk_id)
        user_questions, total_questions = questions.list_by_author(
            user.id, inp.page_size, offset
        )
        user_answers, total_answers = answers.list_by_author(user.id, inp.page_size, offset)
    except DevflowError as e:
        return ProfileOutput(errors=[_error(e, "Get profile")], success=False)

    return ProfileOutput(
        user=user,
        total_questions=total_questions,
        total_answers=total_answers,
        questions=user_questions,
        answers=user_answers,
        questions_is_next=total_questions > offset + len(user_questions),
        answers_is_next=total_answers > offset + len(user_answers),
        can_edit=inp.viewer_clerk_id is not None and inp.viewer_clerk_id == user.clerk_id,
        page=page,
    )
