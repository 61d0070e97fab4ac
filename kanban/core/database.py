"""
FILE: kanban/core/database.py
PURPOSE: SQLite storage handle with explicit open/close lifecycle
EXPORTS:
  - Database (class)
  - SCHEMA_PATH
DEPENDENCIES:
  - sqlite3 (stdlib)
  - pathlib (stdlib)
  - logging (stdlib)
  - kanban.core.exceptions (StorageError)
NOTES:
  - One handle per process, constructed by the caller and passed to repositories
  - Connection is opened lazily and reopened if it was closed
  - Every sqlite3.Error is re-raised as StorageError
  - Each write commits immediately; there are no multi-statement transactions
"""

import logging
import sqlite3
from pathlib import Path
from typing import Any, List, Optional, Sequence

from .exceptions import StorageError

logger = logging.getLogger(__name__)

# Schema file location (relative to this file)
SCHEMA_PATH = Path(__file__).parent / "schema.sql"

MEMORY = ":memory:"


class Database:
    """
    Owned handle on the SQLite store.

    Usage:
        db = Database("~/.kanban/kanban.db")
        db.initialize()
        ...
        db.close()

    Or as a context manager, which closes on exit.
    """

    def __init__(self, path: str):
        self.path = path
        self._conn: Optional[sqlite3.Connection] = None

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    @property
    def connection(self) -> sqlite3.Connection:
        """Return the live connection, opening it if needed."""
        if self._conn is None:
            self._conn = self._connect()
        return self._conn

    def _connect(self) -> sqlite3.Connection:
        if self.path != MEMORY:
            # Ensure directory exists
            Path(self.path).expanduser().parent.mkdir(parents=True, exist_ok=True)
            target = str(Path(self.path).expanduser())
        else:
            target = MEMORY

        try:
            conn = sqlite3.connect(target)
        except sqlite3.Error as e:
            raise StorageError(f"Could not open database at {self.path}: {e}") from e

        # Named column access in from_row()
        conn.row_factory = sqlite3.Row
        logger.debug("Opened database %s", self.path)
        return conn

    def initialize(self) -> None:
        """
        Create tables if they don't exist.

        Safe to call multiple times (uses CREATE TABLE IF NOT EXISTS).
        """
        schema_sql = SCHEMA_PATH.read_text(encoding="utf-8")
        try:
            self.connection.executescript(schema_sql)
            self.connection.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Could not initialize schema: {e}") from e
        logger.debug("Schema initialized for %s", self.path)

    def close(self) -> None:
        """Close the connection. Idempotent."""
        if self._conn is None:
            return
        try:
            self._conn.close()
        except sqlite3.Error as e:
            raise StorageError(f"Error closing database connection: {e}") from e
        finally:
            self._conn = None
        logger.debug("Closed database %s", self.path)

    # --- Statement helpers ---

    def execute(self, sql: str, params: Sequence[Any] = ()) -> sqlite3.Cursor:
        """Run a write statement and commit it."""
        conn = self.connection
        try:
            cursor = conn.execute(sql, tuple(params))
            conn.commit()
        except sqlite3.Error as e:
            if conn.in_transaction:
                conn.rollback()
            raise StorageError(str(e)) from e
        return cursor

    def query_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[sqlite3.Row]:
        try:
            return self.connection.execute(sql, tuple(params)).fetchone()
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e

    def query_all(self, sql: str, params: Sequence[Any] = ()) -> List[sqlite3.Row]:
        try:
            return self.connection.execute(sql, tuple(params)).fetchall()
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e
