from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient

from devflow.adapters.sqlite.database import Database
from devflow.adapters.sqlite.repos import (
    SQLiteAnswerRepo,
    SQLiteInteractionRepo,
    SQLiteQuestionRepo,
    SQLiteTagRepo,
    SQLiteUserRepo,
    SQLiteVoteRepo,
)
from devflow.domain.entities import User
from devflow.shell.revalidation import RevalidationBus


class FixedClock:
    """Clock pinned to one instant."""

    def __init__(self, fixed: datetime | None = None) -> None:
        self._now = fixed or datetime(2026, 1, 14, 12, 0, 0, tzinfo=UTC)

    def now_utc(self) -> datetime:
        return self._now


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'devflow.db'}"


@pytest.fixture
def db(db_url):
    """A connected, migrated database in a temp directory."""
    database = Database(db_url)
    database.connect()
    yield database
    database.close()


@pytest.fixture
def user_repo(db):
    return SQLiteUserRepo(db)


@pytest.fixture
def question_repo(db):
    return SQLiteQuestionRepo(db)


@pytest.fixture
def tag_repo(db):
    return SQLiteTagRepo(db)


@pytest.fixture
def answer_repo(db):
    return SQLiteAnswerRepo(db)


@pytest.fixture
def interaction_repo(db):
    return SQLiteInteractionRepo(db)


@pytest.fixture
def vote_repo(db):
    return SQLiteVoteRepo(db)


@pytest.fixture
def author(user_repo):
    return user_repo.save(
        User(
            clerk_id="user_author",
            name="Ada Author",
            username="ada",
            email="ada@example.com",
        )
    )


@pytest.fixture
def voter(user_repo):
    return user_repo.save(
        User(
            clerk_id="user_voter",
            name="Vic Voter",
            username="vic",
            email="vic@example.com",
        )
    )


@pytest.fixture
def revalidator():
    return RevalidationBus()


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def client(db_url, monkeypatch):
    """API client whose lifespan connects to a fresh temp database."""
    monkeypatch.setenv("DEVFLOW_DATABASE_URL", db_url)
    from devflow.api.main import app

    with TestClient(app) as c:
        yield c
