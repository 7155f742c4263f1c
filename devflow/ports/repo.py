from contextlib import AbstractContextManager
from typing import Any, Protocol
from uuid import UUID

from devflow.domain.entities import (
    Answer,
    EntityType,
    Interaction,
    Question,
    Tag,
    User,
    VoteDirection,
    VoteTally,
)


class UnitOfWorkPort(Protocol):
    def transaction(self) -> AbstractContextManager[Any]:
        """Group repo calls into one atomic store transaction."""
        ...


class UserRepoPort(Protocol):
    def save(self, user: User) -> User:
        ...

    def get_by_id(self, user_id: UUID) -> User | None:
        ...

    def get_by_clerk_id(self, clerk_id: str) -> User | None:
        ...

    def get_many(self, user_ids: list[UUID]) -> list[User]:
        ...


class QuestionRepoPort(Protocol):
    def insert(self, question: Question) -> Question:
        ...

    def get_by_id(self, question_id: UUID) -> Question | None:
        ...

    def list_all(self) -> list[Question]:
        ...

    def update_text(self, question_id: UUID, title: str, content: str) -> None:
        ...

    def add_tags(self, question_id: UUID, tag_ids: list[UUID]) -> None:
        ...

    def increment_views(self, question_id: UUID) -> None:
        ...

    def delete(self, question_id: UUID) -> None:
        ...

    def list_by_author(
        self, author_id: UUID, limit: int, offset: int
    ) -> tuple[list[Question], int]:
        """Return (page, total_count) of an author's questions."""
        ...


class TagRepoPort(Protocol):
    def find_or_create(self, name: str, question_id: UUID) -> Tag:
        """
        Match a tag by case-insensitive exact name, creating it if absent,
        and link ``question_id`` to it. Atomic at the store level.
        """
        ...

    def get_by_name(self, name: str) -> Tag | None:
        ...

    def get_many(self, tag_ids: list[UUID]) -> list[Tag]:
        ...

    def unlink_question(self, question_id: UUID) -> None:
        ...


class AnswerRepoPort(Protocol):
    def save(self, answer: Answer) -> Answer:
        ...

    def get_by_id(self, answer_id: UUID) -> Answer | None:
        ...

    def list_by_question(self, question_id: UUID) -> list[Answer]:
        ...

    def delete_by_question(self, question_id: UUID) -> None:
        ...

    def list_by_author(
        self, author_id: UUID, limit: int, offset: int
    ) -> tuple[list[Answer], int]:
        ...


class InteractionRepoPort(Protocol):
    def save(self, interaction: Interaction) -> Interaction:
        ...

    def list_by_question(self, question_id: UUID) -> list[Interaction]:
        ...

    def delete_by_question(self, question_id: UUID) -> None:
        ...


class VoteRepoPort(Protocol):
    def entity_exists(self, entity_type: EntityType, entity_id: UUID) -> bool:
        ...

    def set_vote(
        self,
        entity_type: EntityType,
        entity_id: UUID,
        user_id: UUID,
        direction: VoteDirection,
    ) -> None:
        """Record the user's vote, replacing any previous one."""
        ...

    def clear_vote(self, entity_type: EntityType, entity_id: UUID, user_id: UUID) -> None:
        ...

    def tally(self, entity_type: EntityType, entity_id: UUID) -> VoteTally:
        ...

    def delete_for(self, entity_type: EntityType, entity_id: UUID) -> None:
        ...
