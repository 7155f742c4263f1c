"""
SQLite database handle.

One ``Database`` owns one ``sqlite3`` connection for the lifetime of the
process. The FastAPI lifespan opens it at startup and closes it at shutdown;
repositories receive it through dependency injection.

Connection string: ``sqlite:///<path>`` (``sqlite:///:memory:`` allowed) or a
bare filesystem path, read from ``DEVFLOW_DATABASE_URL`` by ``from_env``.
A missing URL is tolerated: ``connect`` logs and returns, and every data
operation afterwards raises ``ConnectionUnavailableError``.
"""

from __future__ import annotations

import logging
import os
import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from devflow.adapters.sqlite.migrator import SQLiteMigrator
from devflow.core.errors import ConnectionUnavailableError, StoreOperationError

logger = logging.getLogger(__name__)

DATABASE_URL_ENV = "DEVFLOW_DATABASE_URL"
MIGRATIONS_DIR = Path(__file__).parent / "migrations"


def dict_factory(cursor: sqlite3.Cursor, row: tuple[Any, ...]) -> dict[str, Any]:
    """Convert SQLite row to dictionary."""
    return {col[0]: row[idx] for idx, col in enumerate(cursor.description)}


def path_from_url(url: str) -> str:
    """Strip the ``sqlite:///`` scheme, if present."""
    if url.startswith("sqlite:///"):
        return url[len("sqlite:///") :]
    return url


class Database:
    def __init__(self, url: str | None, env_var: str = DATABASE_URL_ENV) -> None:
        self.url = url
        self.env_var = env_var
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.RLock()
        self._depth = 0

    @classmethod
    def from_env(cls, env_var: str = DATABASE_URL_ENV) -> Database:
        return cls(os.environ.get(env_var), env_var=env_var)

    @property
    def connected(self) -> bool:
        return self._conn is not None

    def connect(self) -> None:
        """Open the connection once; later calls are no-ops."""
        if not self.url:
            logger.warning("Missing %s", self.env_var)
            return

        with self._lock:
            if self._conn is not None:
                return

            path = path_from_url(self.url)
            try:
                conn = sqlite3.connect(path, check_same_thread=False)
            except sqlite3.Error:
                logger.exception("Database connection failed (%s)", path)
                return

            try:
                conn.row_factory = dict_factory
                conn.execute("PRAGMA foreign_keys = ON;")
                SQLiteMigrator(conn, MIGRATIONS_DIR).run_migrations()
            except (sqlite3.Error, RuntimeError):
                logger.exception("Database setup failed (%s)", path)
                conn.close()
                return

            self._conn = conn
            logger.info("Database is connected (%s)", path)

    def close(self) -> None:
        with self._lock:
            if self._conn is None:
                return
            self._conn.close()
            self._conn = None
            logger.info("Database connection closed")

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """
        Yield the connection inside a transaction.

        Re-entrant: nested blocks join the outermost one, which commits on
        success and rolls back on any error.
        """
        with self._lock:
            conn = self._conn
            if conn is None:
                raise ConnectionUnavailableError("Database is not connected")

            self._depth += 1
            try:
                yield conn
            except sqlite3.Error as e:
                if self._depth == 1:
                    conn.rollback()
                raise StoreOperationError(f"Store operation failed: {e}") from e
            except BaseException:
                if self._depth == 1:
                    conn.rollback()
                raise
            else:
                if self._depth == 1:
                    conn.commit()
            finally:
                self._depth -= 1
