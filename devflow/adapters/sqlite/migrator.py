import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)


class SQLiteMigrator:
    def __init__(self, conn: sqlite3.Connection, migrations_dir: Path):
        self.conn = conn
        self.migrations_dir = migrations_dir

    def _ensure_migration_table(self) -> None:
        self.conn.execute("""
            CREATE TABLE IF NOT EXISTS _migrations (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                filename TEXT UNIQUE NOT NULL,
                applied_at DATETIME DEFAULT CURRENT_TIMESTAMP
            );
        """)
        self.conn.commit()

    def _get_applied_migrations(self) -> set[str]:
        rows = self.conn.execute("SELECT filename FROM _migrations").fetchall()
        return {row["filename"] if isinstance(row, dict) else row[0] for row in rows}

    def pending(self) -> list[str]:
        self._ensure_migration_table()
        applied = self._get_applied_migrations()
        files = sorted(p.name for p in self.migrations_dir.glob("*.sql"))
        return [f for f in files if f not in applied]

    def run_migrations(self) -> list[str]:
        """Apply all pending migrations, returning the filenames applied."""
        applied = []
        for filename in self.pending():
            logger.info("Applying migration: %s", filename)
            self._apply_migration(filename)
            applied.append(filename)
        return applied

    def _read_up_script(self, filename: str) -> str:
        content = (self.migrations_dir / filename).read_text()
        # File starts with Up; anything after '-- Down' is ignored.
        if "-- Down" in content:
            return content.split("-- Down")[0]
        return content

    def _apply_migration(self, filename: str) -> None:
        script = self._read_up_script(filename)
        try:
            self.conn.executescript(script)
            self.conn.execute("INSERT INTO _migrations (filename) VALUES (?)", (filename,))
            self.conn.commit()
        except sqlite3.Error as e:
            self.conn.rollback()
            raise RuntimeError(f"Migration {filename} failed: {e}") from e
