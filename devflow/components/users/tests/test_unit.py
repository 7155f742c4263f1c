"""
Users component unit tests: user creation, user info and the profile
aggregate.
"""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from devflow.components.users import (
    CreateUserInput,
    GetUserInfoInput,
    ProfileInput,
    run_create_user,
    run_get_profile,
    run_get_user_info,
)
from devflow.core.errors import ConnectionUnavailableError
from devflow.domain.entities import Answer, Question, User

# --- Mock Implementations ---


class MockClock:
    def now_utc(self) -> datetime:
        return datetime(2026, 1, 14, 12, 0, 0, tzinfo=UTC)


class MockUserRepo:
    def __init__(self) -> None:
        self.items: dict[UUID, User] = {}
        self.available = True

    def save(self, user: User) -> User:
        self.items[user.id] = user
        return user

    def get_by_id(self, user_id: UUID) -> User | None:
        return self.items.get(user_id)

    def get_by_clerk_id(self, clerk_id: str) -> User | None:
        if not self.available:
            raise ConnectionUnavailableError("Database is not connected")
        return next((u for u in self.items.values() if u.clerk_id == clerk_id), None)

    def get_many(self, user_ids: list[UUID]) -> list[User]:
        return [self.items[u] for u in user_ids if u in self.items]


class MockAuthoredRepo:
    """Questions or answers, listed by author in insertion order."""

    def __init__(self) -> None:
        self.items: list[Question | Answer] = []

    def list_by_author(self, author_id: UUID, limit: int, offset: int):
        mine = [i for i in self.items if i.author_id == author_id]
        return mine[offset : offset + limit], len(mine)


def _user_input(clerk_id: str = "user_1") -> CreateUserInput:
    return CreateUserInput(
        clerk_id=clerk_id, name="Ada Lovelace", username="ada", email="ada@example.com"
    )


class TestCreateUser:
    def test_create_user(self) -> None:
        users = MockUserRepo()

        result = run_create_user(_user_input(), users=users, time=MockClock())

        assert result.success
        assert result.user.clerk_id == "user_1"
        assert result.user.joined_at == MockClock().now_utc()
        assert result.user.reputation == 0
        assert users.get_by_clerk_id("user_1") is not None

    def test_duplicate_clerk_id_conflicts(self) -> None:
        users = MockUserRepo()
        run_create_user(_user_input(), users=users, time=MockClock())

        result = run_create_user(_user_input(), users=users, time=MockClock())

        assert not result.success
        assert result.errors[0].code == "conflict"
        assert len(users.items) == 1


class TestProfile:
    def setup_method(self) -> None:
        self.users = MockUserRepo()
        self.user = self.users.save(
            User(clerk_id="owner", name="Ada", username="ada", email="a@example.com")
        )
        self.questions = MockAuthoredRepo()
        self.answers = MockAuthoredRepo()
        for i in range(5):
            self.questions.items.append(
                Question(title=f"Q{i}", content="C", author_id=self.user.id)
            )
        for i in range(2):
            self.answers.items.append(
                Answer(question_id=uuid4(), author_id=self.user.id, content=f"A{i}")
            )
        # Someone else's question
        self.questions.items.append(Question(title="Other", content="C", author_id=uuid4()))

    def _profile(self, **kwargs):
        inp = ProfileInput(clerk_id=kwargs.pop("clerk_id", "owner"), page_size=2, **kwargs)
        return run_get_profile(
            inp, users=self.users, questions=self.questions, answers=self.answers
        )

    def test_totals_and_first_page(self) -> None:
        result = self._profile()

        assert result.success
        assert result.user == self.user
        assert result.total_questions == 5
        assert result.total_answers == 2
        assert [q.title for q in result.questions] == ["Q0", "Q1"]
        assert result.questions_is_next
        assert not result.answers_is_next

    def test_last_page(self) -> None:
        result = self._profile(page=3)

        assert [q.title for q in result.questions] == ["Q4"]
        assert not result.questions_is_next
        assert result.answers == []

    @pytest.mark.parametrize("page", [0, -3])
    def test_page_below_one_is_first_page(self, page: int) -> None:
        result = self._profile(page=page)
        assert result.page == 1
        assert [q.title for q in result.questions] == ["Q0", "Q1"]

    def test_owner_can_edit(self) -> None:
        assert self._profile(viewer_clerk_id="owner").can_edit

    def test_other_viewer_cannot_edit(self) -> None:
        assert not self._profile(viewer_clerk_id="someone_else").can_edit

    def test_anonymous_viewer_cannot_edit(self) -> None:
        assert not self._profile().can_edit

    def test_unknown_user(self) -> None:
        result = self._profile(clerk_id="ghost")

        assert not result.success
        assert result.errors[0].code == "not_found"
        assert result.errors[0].message == "User not found"

    def test_connection_unavailable(self) -> None:
        self.users.available = False
        result = self._profile()

        assert not result.success
        assert result.errors[0].code == "connection_unavailable"


class TestUserInfo:
    def test_counts_only(self) -> None:
        users = MockUserRepo()
        user = users.save(User(clerk_id="u", name="U", username="u", email="u@example.com"))
        questions = MockAuthoredRepo()
        questions.items.append(Question(title="Q", content="C", author_id=user.id))

        result = run_get_user_info(
            GetUserInfoInput(clerk_id="u"),
            users=users,
            questions=questions,
            answers=MockAuthoredRepo(),
        )

        assert result.success
        assert result.user == user
        assert result.total_questions == 1
        assert result.total_answers == 0

    def test_unknown_user(self) -> None:
        result = run_get_user_info(
            GetUserInfoInput(clerk_id="ghost"),
            users=MockUserRepo(),
            questions=MockAuthoredRepo(),
            answers=MockAuthoredRepo(),
        )
        assert result.errors[0].code == "not_found"
