"""
SQLite repositories.

Every repository shares one ``Database`` handle and runs each call inside
``Database.transaction()``, so calls made within an outer transaction (a
component grouping several writes) join it instead of committing alone.
"""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from devflow.adapters.sqlite.database import Database
from devflow.domain.entities import (
    Answer,
    EntityType,
    Interaction,
    Question,
    Tag,
    User,
    VoteDirection,
    VoteTally,
    utc_now,
)

VOTE_VALUES: dict[VoteDirection, int] = {"up": 1, "down": -1}


def parse_dt(s: str) -> datetime:
    return datetime.fromisoformat(s)


def tag_key(name: str) -> str:
    """Case-insensitive lookup key for a tag name (Unicode case folding)."""
    return name.casefold()


def _placeholders(n: int) -> str:
    return ", ".join("?" for _ in range(n))


class SQLiteRepoBase:
    """Base class for SQLite repositories."""

    def __init__(self, db: Database):
        self.db = db

    def _voters(
        self, conn: sqlite3.Connection, entity_type: EntityType, entity_id: UUID
    ) -> tuple[list[UUID], list[UUID]]:
        rows = conn.execute(
            "SELECT user_id, value FROM votes WHERE entity_type = ? AND entity_id = ? "
            "ORDER BY voted_at, rowid",
            (entity_type, str(entity_id)),
        ).fetchall()
        up = [UUID(r["user_id"]) for r in rows if r["value"] > 0]
        down = [UUID(r["user_id"]) for r in rows if r["value"] < 0]
        return up, down


class SQLiteUserRepo(SQLiteRepoBase):
    def save(self, user: User) -> User:
        with self.db.transaction() as conn:
            conn.execute(
                """
                INSERT INTO users (
                    id, clerk_id, name, username, email, picture,
                    bio, location, portfolio_website, reputation, joined_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    name=excluded.name,
                    username=excluded.username,
                    email=excluded.email,
                    picture=excluded.picture,
                    bio=excluded.bio,
                    location=excluded.location,
                    portfolio_website=excluded.portfolio_website,
                    reputation=excluded.reputation
                """,
                (
                    str(user.id),
                    user.clerk_id,
                    user.name,
                    user.username,
                    user.email,
                    user.picture,
                    user.bio,
                    user.location,
                    user.portfolio_website,
                    user.reputation,
                    user.joined_at.isoformat(),
                ),
            )
        return user

    def get_by_id(self, user_id: UUID) -> User | None:
        with self.db.transaction() as conn:
            row = conn.execute("SELECT * FROM users WHERE id = ?", (str(user_id),)).fetchone()
        return self._map_row(row) if row else None

    def get_by_clerk_id(self, clerk_id: str) -> User | None:
        with self.db.transaction() as conn:
            row = conn.execute("SELECT * FROM users WHERE clerk_id = ?", (clerk_id,)).fetchone()
        return self._map_row(row) if row else None

    def get_many(self, user_ids: list[UUID]) -> list[User]:
        if not user_ids:
            return []
        ids = list(dict.fromkeys(str(u) for u in user_ids))
        with self.db.transaction() as conn:
            rows = conn.execute(
                f"SELECT * FROM users WHERE id IN ({_placeholders(len(ids))})", ids
            ).fetchall()
        return [self._map_row(r) for r in rows]

    def _map_row(self, row: dict[str, Any]) -> User:
        return User(
            id=UUID(row["id"]),
            clerk_id=row["clerk_id"],
            name=row["name"],
            username=row["username"],
            email=row["email"],
            picture=row["picture"],
            bio=row["bio"],
            location=row["location"],
            portfolio_website=row["portfolio_website"],
            reputation=row["reputation"],
            joined_at=parse_dt(row["joined_at"]),
        )


class SQLiteQuestionRepo(SQLiteRepoBase):
    def insert(self, question: Question) -> Question:
        with self.db.transaction() as conn:
            conn.execute(
                """
                INSERT INTO questions (id, title, content, author_id, views, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    str(question.id),
                    question.title,
                    question.content,
                    str(question.author_id),
                    question.views,
                    question.created_at.isoformat(),
                ),
            )
            if question.tag_ids:
                self.add_tags(question.id, question.tag_ids)
        return question

    def get_by_id(self, question_id: UUID) -> Question | None:
        with self.db.transaction() as conn:
            row = conn.execute(
                "SELECT * FROM questions WHERE id = ?", (str(question_id),)
            ).fetchone()
            return self._map_row(conn, row) if row else None

    def list_all(self) -> list[Question]:
        with self.db.transaction() as conn:
            rows = conn.execute(
                "SELECT * FROM questions ORDER BY created_at DESC, rowid DESC"
            ).fetchall()
            return [self._map_row(conn, r) for r in rows]

    def update_text(self, question_id: UUID, title: str, content: str) -> None:
        with self.db.transaction() as conn:
            conn.execute(
                "UPDATE questions SET title = ?, content = ? WHERE id = ?",
                (title, content, str(question_id)),
            )

    def add_tags(self, question_id: UUID, tag_ids: list[UUID]) -> None:
        with self.db.transaction() as conn:
            conn.executemany(
                "INSERT OR IGNORE INTO question_tags (question_id, tag_id) VALUES (?, ?)",
                [(str(question_id), str(t)) for t in tag_ids],
            )

    def increment_views(self, question_id: UUID) -> None:
        with self.db.transaction() as conn:
            conn.execute(
                "UPDATE questions SET views = views + 1 WHERE id = ?", (str(question_id),)
            )

    def delete(self, question_id: UUID) -> None:
        with self.db.transaction() as conn:
            conn.execute("DELETE FROM question_tags WHERE question_id = ?", (str(question_id),))
            conn.execute("DELETE FROM questions WHERE id = ?", (str(question_id),))

    def list_by_author(
        self, author_id: UUID, limit: int, offset: int
    ) -> tuple[list[Question], int]:
        with self.db.transaction() as conn:
            total = conn.execute(
                "SELECT COUNT(*) AS n FROM questions WHERE author_id = ?", (str(author_id),)
            ).fetchone()["n"]
            rows = conn.execute(
                "SELECT * FROM questions WHERE author_id = ? "
                "ORDER BY views DESC, created_at DESC, rowid DESC LIMIT ? OFFSET ?",
                (str(author_id), limit, offset),
            ).fetchall()
            return [self._map_row(conn, r) for r in rows], total

    def _map_row(self, conn: sqlite3.Connection, row: dict[str, Any]) -> Question:
        tag_rows = conn.execute(
            "SELECT tag_id FROM question_tags WHERE question_id = ? ORDER BY seq",
            (row["id"],),
        ).fetchall()
        up, down = self._voters(conn, "question", UUID(row["id"]))
        return Question(
            id=UUID(row["id"]),
            title=row["title"],
            content=row["content"],
            author_id=UUID(row["author_id"]),
            tag_ids=[UUID(t["tag_id"]) for t in tag_rows],
            upvotes=up,
            downvotes=down,
            views=row["views"],
            created_at=parse_dt(row["created_at"]),
        )


class SQLiteTagRepo(SQLiteRepoBase):
    def find_or_create(self, name: str, question_id: UUID) -> Tag:
        with self.db.transaction() as conn:
            # name_key is UNIQUE: the insert is a no-op when a tag with the
            # same name in any casing already exists.
            conn.execute(
                "INSERT INTO tags (id, name, name_key, created_at) VALUES (?, ?, ?, ?) "
                "ON CONFLICT(name_key) DO NOTHING",
                (str(uuid4()), name, tag_key(name), utc_now().isoformat()),
            )
            row = conn.execute(
                "SELECT * FROM tags WHERE name_key = ?", (tag_key(name),)
            ).fetchone()
            conn.execute(
                "INSERT OR IGNORE INTO tag_questions (tag_id, question_id) VALUES (?, ?)",
                (row["id"], str(question_id)),
            )
            return self._map_row(conn, row)

    def get_by_name(self, name: str) -> Tag | None:
        with self.db.transaction() as conn:
            row = conn.execute(
                "SELECT * FROM tags WHERE name_key = ?", (tag_key(name),)
            ).fetchone()
            return self._map_row(conn, row) if row else None

    def get_many(self, tag_ids: list[UUID]) -> list[Tag]:
        if not tag_ids:
            return []
        ids = list(dict.fromkeys(str(t) for t in tag_ids))
        with self.db.transaction() as conn:
            rows = conn.execute(
                f"SELECT * FROM tags WHERE id IN ({_placeholders(len(ids))})", ids
            ).fetchall()
            by_id = {r["id"]: self._map_row(conn, r) for r in rows}
        # Preserve the caller's order
        return [by_id[i] for i in ids if i in by_id]

    def list_all(self) -> list[Tag]:
        with self.db.transaction() as conn:
            rows = conn.execute("SELECT * FROM tags ORDER BY name_key").fetchall()
            return [self._map_row(conn, r) for r in rows]

    def unlink_question(self, question_id: UUID) -> None:
        with self.db.transaction() as conn:
            conn.execute("DELETE FROM tag_questions WHERE question_id = ?", (str(question_id),))

    def _map_row(self, conn: sqlite3.Connection, row: dict[str, Any]) -> Tag:
        links = conn.execute(
            "SELECT question_id FROM tag_questions WHERE tag_id = ? ORDER BY seq",
            (row["id"],),
        ).fetchall()
        return Tag(
            id=UUID(row["id"]),
            name=row["name"],
            description=row["description"],
            question_ids=[UUID(link["question_id"]) for link in links],
            created_at=parse_dt(row["created_at"]),
        )


class SQLiteAnswerRepo(SQLiteRepoBase):
    def save(self, answer: Answer) -> Answer:
        with self.db.transaction() as conn:
            conn.execute(
                """
                INSERT INTO answers (id, question_id, author_id, content, created_at)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET content=excluded.content
                """,
                (
                    str(answer.id),
                    str(answer.question_id),
                    str(answer.author_id),
                    answer.content,
                    answer.created_at.isoformat(),
                ),
            )
        return answer

    def get_by_id(self, answer_id: UUID) -> Answer | None:
        with self.db.transaction() as conn:
            row = conn.execute("SELECT * FROM answers WHERE id = ?", (str(answer_id),)).fetchone()
            return self._map_row(conn, row) if row else None

    def list_by_question(self, question_id: UUID) -> list[Answer]:
        with self.db.transaction() as conn:
            rows = conn.execute(
                "SELECT * FROM answers WHERE question_id = ? ORDER BY created_at, rowid",
                (str(question_id),),
            ).fetchall()
            return [self._map_row(conn, r) for r in rows]

    def delete_by_question(self, question_id: UUID) -> None:
        with self.db.transaction() as conn:
            conn.execute(
                "DELETE FROM votes WHERE entity_type = 'answer' AND entity_id IN "
                "(SELECT id FROM answers WHERE question_id = ?)",
                (str(question_id),),
            )
            conn.execute("DELETE FROM answers WHERE question_id = ?", (str(question_id),))

    def list_by_author(
        self, author_id: UUID, limit: int, offset: int
    ) -> tuple[list[Answer], int]:
        with self.db.transaction() as conn:
            total = conn.execute(
                "SELECT COUNT(*) AS n FROM answers WHERE author_id = ?", (str(author_id),)
            ).fetchone()["n"]
            rows = conn.execute(
                "SELECT * FROM answers WHERE author_id = ? "
                "ORDER BY created_at DESC, rowid DESC LIMIT ? OFFSET ?",
                (str(author_id), limit, offset),
            ).fetchall()
            return [self._map_row(conn, r) for r in rows], total

    def _map_row(self, conn: sqlite3.Connection, row: dict[str, Any]) -> Answer:
        up, down = self._voters(conn, "answer", UUID(row["id"]))
        return Answer(
            id=UUID(row["id"]),
            question_id=UUID(row["question_id"]),
            author_id=UUID(row["author_id"]),
            content=row["content"],
            upvotes=up,
            downvotes=down,
            created_at=parse_dt(row["created_at"]),
        )


class SQLiteInteractionRepo(SQLiteRepoBase):
    def save(self, interaction: Interaction) -> Interaction:
        with self.db.transaction() as conn:
            conn.execute(
                """
                INSERT INTO interactions (
                    id, user_id, action, question_id, answer_id, tag_ids_json, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    str(interaction.id),
                    str(interaction.user_id),
                    interaction.action,
                    str(interaction.question_id) if interaction.question_id else None,
                    str(interaction.answer_id) if interaction.answer_id else None,
                    json.dumps([str(t) for t in interaction.tag_ids]),
                    interaction.created_at.isoformat(),
                ),
            )
        return interaction

    def list_by_question(self, question_id: UUID) -> list[Interaction]:
        with self.db.transaction() as conn:
            rows = conn.execute(
                "SELECT * FROM interactions WHERE question_id = ? ORDER BY created_at, rowid",
                (str(question_id),),
            ).fetchall()
        return [self._map_row(r) for r in rows]

    def delete_by_question(self, question_id: UUID) -> None:
        with self.db.transaction() as conn:
            conn.execute("DELETE FROM interactions WHERE question_id = ?", (str(question_id),))

    def _map_row(self, row: dict[str, Any]) -> Interaction:
        return Interaction(
            id=UUID(row["id"]),
            user_id=UUID(row["user_id"]),
            action=row["action"],
            question_id=UUID(row["question_id"]) if row["question_id"] else None,
            answer_id=UUID(row["answer_id"]) if row["answer_id"] else None,
            tag_ids=[UUID(t) for t in json.loads(row["tag_ids_json"])],
            created_at=parse_dt(row["created_at"]),
        )


class SQLiteVoteRepo(SQLiteRepoBase):
    _TABLES: dict[str, str] = {"question": "questions", "answer": "answers"}

    def entity_exists(self, entity_type: EntityType, entity_id: UUID) -> bool:
        table = self._TABLES[entity_type]
        with self.db.transaction() as conn:
            row = conn.execute(
                f"SELECT 1 AS found FROM {table} WHERE id = ?", (str(entity_id),)
            ).fetchone()
        return row is not None

    def set_vote(
        self,
        entity_type: EntityType,
        entity_id: UUID,
        user_id: UUID,
        direction: VoteDirection,
    ) -> None:
        with self.db.transaction() as conn:
            conn.execute(
                """
                INSERT INTO votes (entity_type, entity_id, user_id, value)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(entity_type, entity_id, user_id) DO UPDATE SET
                    value=excluded.value,
                    voted_at=CURRENT_TIMESTAMP
                """,
                (entity_type, str(entity_id), str(user_id), VOTE_VALUES[direction]),
            )

    def clear_vote(self, entity_type: EntityType, entity_id: UUID, user_id: UUID) -> None:
        with self.db.transaction() as conn:
            conn.execute(
                "DELETE FROM votes WHERE entity_type = ? AND entity_id = ? AND user_id = ?",
                (entity_type, str(entity_id), str(user_id)),
            )

    def tally(self, entity_type: EntityType, entity_id: UUID) -> VoteTally:
        with self.db.transaction() as conn:
            up, down = self._voters(conn, entity_type, entity_id)
        return VoteTally(
            entity_type=entity_type,
            entity_id=entity_id,
            upvotes=len(up),
            downvotes=len(down),
        )

    def delete_for(self, entity_type: EntityType, entity_id: UUID) -> None:
        with self.db.transaction() as conn:
            conn.execute(
                "DELETE FROM votes WHERE entity_type = ? AND entity_id = ?",
                (entity_type, str(entity_id)),
            )
