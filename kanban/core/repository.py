"""
FILE: kanban/core/repository.py
PURPOSE: Database operations for boards, columns, tasks, and tags
EXPORTS:
  - BoardRepository: save, find_by_id, find_all, update, delete_by_id
  - ColumnRepository: save, find_by_id, find_by_board_id, count_by_board_id,
    update, delete_by_id, delete_by_board_id
  - TaskRepository: save, find_by_id, find_by_column_id, next_position,
    update, delete_by_id, delete_by_column_id
  - TagRepository: save, find_by_id, find_by_name, find_all, find_by_task_id,
    attach, detach, detach_all_from_task, detach_all_from_column, delete_by_id
DEPENDENCIES:
  - kanban.core.database (Database)
  - kanban.core.models (Board, Column, Task, Tag)
NOTES:
  - Each repository is constructed with the shared Database handle
  - Returns domain objects, never raw rows
  - No validation here; the service layer checks existence before mutating
  - Row mapping lives on the models (from_row / to_row)
"""

from typing import List, Optional

from .database import Database
from .models import Board, Column, Task, Tag


class BoardRepository:
    """Row access for the boards table."""

    def __init__(self, db: Database):
        self.db = db

    def save(self, board: Board) -> Board:
        """Insert a new board and set its generated ID."""
        cursor = self.db.execute(
            "INSERT INTO boards (name, created_at) VALUES (?, ?)",
            board.to_row(),
        )
        board.id = cursor.lastrowid
        return board

    def find_by_id(self, board_id: int) -> Optional[Board]:
        """
        Fetch single board by ID.

        Returns:
            Board object (without columns) if found, None otherwise
        """
        row = self.db.query_one(
            "SELECT id, name, created_at FROM boards WHERE id = ?", (board_id,)
        )
        return Board.from_row(row) if row else None

    def find_all(self) -> List[Board]:
        """
        List all boards.

        Returns:
            Boards ordered by creation date (newest first)
        """
        rows = self.db.query_all(
            "SELECT id, name, created_at FROM boards ORDER BY created_at DESC, id DESC"
        )
        return [Board.from_row(row) for row in rows]

    def update(self, board: Board) -> None:
        self.db.execute(
            "UPDATE boards SET name = ? WHERE id = ?", (board.name, board.id)
        )

    def delete_by_id(self, board_id: int) -> None:
        self.db.execute("DELETE FROM boards WHERE id = ?", (board_id,))


class ColumnRepository:
    """Row access for the columns table."""

    def __init__(self, db: Database):
        self.db = db

    def save(self, column: Column) -> Column:
        """Insert a new column and set its generated ID."""
        cursor = self.db.execute(
            "INSERT INTO columns (board_id, name, position, color) VALUES (?, ?, ?, ?)",
            column.to_row(),
        )
        column.id = cursor.lastrowid
        return column

    def find_by_id(self, column_id: int) -> Optional[Column]:
        row = self.db.query_one(
            "SELECT id, board_id, name, position, color FROM columns WHERE id = ?",
            (column_id,),
        )
        return Column.from_row(row) if row else None

    def find_by_board_id(self, board_id: int) -> List[Column]:
        """
        List columns of a board.

        Returns:
            Columns ordered by position (display order)
        """
        rows = self.db.query_all(
            """
            SELECT id, board_id, name, position, color
            FROM columns
            WHERE board_id = ?
            ORDER BY position, id
            """,
            (board_id,),
        )
        return [Column.from_row(row) for row in rows]

    def count_by_board_id(self, board_id: int) -> int:
        row = self.db.query_one(
            "SELECT COUNT(*) FROM columns WHERE board_id = ?", (board_id,)
        )
        return row[0]

    def update(self, column: Column) -> None:
        """Persist name, position, and color (board_id never changes)."""
        self.db.execute(
            "UPDATE columns SET name = ?, position = ?, color = ? WHERE id = ?",
            (column.name, column.position, column.color, column.id),
        )

    def delete_by_id(self, column_id: int) -> None:
        self.db.execute("DELETE FROM columns WHERE id = ?", (column_id,))

    def delete_by_board_id(self, board_id: int) -> None:
        self.db.execute("DELETE FROM columns WHERE board_id = ?", (board_id,))


class TaskRepository:
    """Row access for the tasks table."""

    _COLUMNS = "id, column_id, title, description, priority, position, created_at, due_date"

    def __init__(self, db: Database):
        self.db = db

    def save(self, task: Task) -> Task:
        """Insert a new task and set its generated ID."""
        cursor = self.db.execute(
            """
            INSERT INTO tasks (column_id, title, description, priority, position, created_at, due_date)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            task.to_row(),
        )
        task.id = cursor.lastrowid
        return task

    def find_by_id(self, task_id: int) -> Optional[Task]:
        row = self.db.query_one(
            f"SELECT {self._COLUMNS} FROM tasks WHERE id = ?", (task_id,)
        )
        return Task.from_row(row) if row else None

    def find_by_column_id(self, column_id: int) -> List[Task]:
        """
        List tasks in a column.

        Returns:
            Tasks ordered by position (display order)
        """
        rows = self.db.query_all(
            f"SELECT {self._COLUMNS} FROM tasks WHERE column_id = ? ORDER BY position, id",
            (column_id,),
        )
        return [Task.from_row(row) for row in rows]

    def next_position(self, column_id: int) -> int:
        """
        Position for a task appended to the end of a column.

        Returns:
            max(existing positions) + 1, or 1 for an empty column
        """
        row = self.db.query_one(
            "SELECT COALESCE(MAX(position), 0) + 1 FROM tasks WHERE column_id = ?",
            (column_id,),
        )
        return row[0]

    def update(self, task: Task) -> None:
        """Persist every mutable field (created_at never changes)."""
        self.db.execute(
            """
            UPDATE tasks
            SET column_id = ?,
                title = ?,
                description = ?,
                priority = ?,
                position = ?,
                due_date = ?
            WHERE id = ?
            """,
            (
                task.column_id,
                task.title,
                task.description,
                task.priority.value if task.priority else None,
                task.position,
                task.due_date,
                task.id,
            ),
        )

    def delete_by_id(self, task_id: int) -> None:
        self.db.execute("DELETE FROM tasks WHERE id = ?", (task_id,))

    def delete_by_column_id(self, column_id: int) -> None:
        self.db.execute("DELETE FROM tasks WHERE column_id = ?", (column_id,))


class TagRepository:
    """Row access for the tags and task_tags tables."""

    def __init__(self, db: Database):
        self.db = db

    def save(self, tag: Tag) -> Tag:
        """
        Insert a new tag and set its generated ID.

        Raises:
            StorageError: If the name already exists (UNIQUE constraint)
        """
        cursor = self.db.execute(
            "INSERT INTO tags (name, color) VALUES (?, ?)", tag.to_row()
        )
        tag.id = cursor.lastrowid
        return tag

    def find_by_id(self, tag_id: int) -> Optional[Tag]:
        row = self.db.query_one(
            "SELECT id, name, color FROM tags WHERE id = ?", (tag_id,)
        )
        return Tag.from_row(row) if row else None

    def find_by_name(self, name: str) -> Optional[Tag]:
        row = self.db.query_one(
            "SELECT id, name, color FROM tags WHERE name = ?", (name,)
        )
        return Tag.from_row(row) if row else None

    def find_all(self) -> List[Tag]:
        rows = self.db.query_all("SELECT id, name, color FROM tags ORDER BY name")
        return [Tag.from_row(row) for row in rows]

    def find_by_task_id(self, task_id: int) -> List[Tag]:
        rows = self.db.query_all(
            """
            SELECT tags.id, tags.name, tags.color
            FROM tags
            JOIN task_tags ON task_tags.tag_id = tags.id
            WHERE task_tags.task_id = ?
            ORDER BY tags.name
            """,
            (task_id,),
        )
        return [Tag.from_row(row) for row in rows]

    def attach(self, task_id: int, tag_id: int) -> None:
        """Link a tag to a task. Linking twice is a no-op."""
        self.db.execute(
            "INSERT OR IGNORE INTO task_tags (task_id, tag_id) VALUES (?, ?)",
            (task_id, tag_id),
        )

    def detach(self, task_id: int, tag_id: int) -> None:
        self.db.execute(
            "DELETE FROM task_tags WHERE task_id = ? AND tag_id = ?",
            (task_id, tag_id),
        )

    def detach_all_from_task(self, task_id: int) -> None:
        self.db.execute("DELETE FROM task_tags WHERE task_id = ?", (task_id,))

    def detach_all_from_column(self, column_id: int) -> None:
        """Remove tag links of every task in a column."""
        self.db.execute(
            "DELETE FROM task_tags WHERE task_id IN (SELECT id FROM tasks WHERE column_id = ?)",
            (column_id,),
        )

    def delete_by_id(self, tag_id: int) -> None:
        """Delete a tag and every link to it."""
        self.db.execute("DELETE FROM task_tags WHERE tag_id = ?", (tag_id,))
        self.db.execute("DELETE FROM tags WHERE id = ?", (tag_id,))
