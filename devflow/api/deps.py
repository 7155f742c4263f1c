import os
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from devflow.adapters.clock import SystemClock
from devflow.adapters.sqlite.database import Database
from devflow.adapters.sqlite.repos import (
    SQLiteAnswerRepo,
    SQLiteInteractionRepo,
    SQLiteQuestionRepo,
    SQLiteTagRepo,
    SQLiteUserRepo,
    SQLiteVoteRepo,
)
from devflow.api.identity import decode_identity_token
from devflow.rules.loader import DEFAULT_RULES_PATH, load_rules
from devflow.rules.models import Rules
from devflow.shell.revalidation import RevalidationBus


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.rules_path = Path(os.environ.get("DEVFLOW_RULES_PATH", str(DEFAULT_RULES_PATH)))
        self.secret_key = os.environ.get("DEVFLOW_SECRET_KEY", "dev-secret-unsafe")


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return load_rules_cached(settings.rules_path)


@lru_cache
def load_rules_cached(path: Path) -> Rules:
    return load_rules(path)


# --- Database ---
# The lifespan handler owns the handle; routes borrow it from app.state.
def get_database(request: Request) -> Database:
    return request.app.state.database


def get_revalidator(request: Request) -> RevalidationBus:
    return request.app.state.revalidator


# --- Repos ---
def get_user_repo(db: Database = Depends(get_database)) -> SQLiteUserRepo:
    return SQLiteUserRepo(db)


def get_question_repo(db: Database = Depends(get_database)) -> SQLiteQuestionRepo:
    return SQLiteQuestionRepo(db)


def get_tag_repo(db: Database = Depends(get_database)) -> SQLiteTagRepo:
    return SQLiteTagRepo(db)


def get_answer_repo(db: Database = Depends(get_database)) -> SQLiteAnswerRepo:
    return SQLiteAnswerRepo(db)


def get_interaction_repo(db: Database = Depends(get_database)) -> SQLiteInteractionRepo:
    return SQLiteInteractionRepo(db)


def get_vote_repo(db: Database = Depends(get_database)) -> SQLiteVoteRepo:
    return SQLiteVoteRepo(db)


# Time adapter for deterministic time operations
_clock_instance: SystemClock | None = None


def get_clock() -> SystemClock:
    """Get clock singleton."""
    global _clock_instance
    if _clock_instance is None:
        _clock_instance = SystemClock()
    return _clock_instance


# --- Viewer identity ---
# Sessions live with the external identity provider; we only read the
# identity id (``sub``) from its signed token.
bearer_scheme = HTTPBearer(auto_error=False)


def get_viewer_clerk_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    settings: Settings = Depends(get_settings),
    rules: Rules = Depends(get_rules),
) -> str | None:
    """External identity id of the viewer, or None when anonymous."""
    if credentials is None:
        return None
    return decode_identity_token(
        credentials.credentials, settings.secret_key, rules.identity.algorithm
    )

