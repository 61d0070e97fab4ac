"""Tests for the Database storage handle lifecycle and error wrapping."""

import sqlite3

import pytest

from kanban.core.database import Database
from kanban.core.exceptions import KanbanError, StorageError


def _table_names(db):
    rows = db.query_all("SELECT name FROM sqlite_master WHERE type = 'table'")
    return {row["name"] for row in rows}


def test_connection_is_lazy(db_path):
    db = Database(db_path)

    assert not db.is_open
    db.connection
    assert db.is_open
    db.close()


def test_initialize_creates_all_tables(db):
    assert {"boards", "columns", "tasks", "tags", "task_tags"} <= _table_names(db)


def test_initialize_is_idempotent(db):
    db.execute("INSERT INTO boards (name, created_at) VALUES (?, ?)", ("B", "2026-01-01"))

    db.initialize()

    assert db.query_one("SELECT COUNT(*) FROM boards")[0] == 1


def test_close_is_idempotent_and_reopens(db):
    db.close()
    db.close()
    assert not db.is_open

    # Next use opens again and sees the same file
    assert "boards" in _table_names(db)
    assert db.is_open


def test_creates_parent_directory(tmp_path):
    path = tmp_path / "nested" / "dir" / "kanban.db"

    with Database(str(path)) as db:
        db.initialize()

    assert path.exists()


def test_context_manager_closes(db_path):
    with Database(db_path) as db:
        db.initialize()
        assert db.is_open

    assert not db.is_open


def test_in_memory_database():
    with Database(":memory:") as db:
        db.initialize()
        assert "tasks" in _table_names(db)


def test_bad_sql_raises_storage_error(db):
    with pytest.raises(StorageError) as exc_info:
        db.query_all("SELECT * FROM no_such_table")

    assert isinstance(exc_info.value.__cause__, sqlite3.Error)
    assert isinstance(exc_info.value, KanbanError)


def test_constraint_violation_raises_storage_error(db):
    db.execute("INSERT INTO tags (name, color) VALUES (?, ?)", ("bug", "#FF0000"))

    with pytest.raises(StorageError):
        db.execute("INSERT INTO tags (name, color) VALUES (?, ?)", ("bug", "#00FF00"))

    # Handle is still usable after the failed write
    assert db.query_one("SELECT COUNT(*) FROM tags")[0] == 1


def test_priority_check_constraint(db):
    with pytest.raises(StorageError):
        db.execute(
            "INSERT INTO tasks (column_id, title, priority, position) VALUES (?, ?, ?, ?)",
            (1, "T", "URGENT", 1),
        )


def test_foreign_keys_not_enforced(db):
    """Orphan rows are allowed; integrity is the service layer's job."""
    db.execute(
        "INSERT INTO tasks (column_id, title, position) VALUES (?, ?, ?)",
        (999, "Orphan", 1),
    )

    assert db.query_one("SELECT COUNT(*) FROM tasks")[0] == 1
