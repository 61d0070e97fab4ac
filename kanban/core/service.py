"""
FILE: kanban/core/service.py
PURPOSE: Business logic layer for boards, columns, tasks, and tags
EXPORTS:
  - BoardService: create_board, get_board_with_columns, get_all_boards,
    update_board_name, delete_board
  - ColumnService: add_column, get_column, get_columns_by_board, update_column_name,
    update_column_color, delete_column, compact_positions
  - TaskService: create_task, get_task, get_tasks_by_column, update_task, move_task,
    delete_task, set_task_priority, set_task_due_date, compact_positions
  - TagService: create_tag, get_tag, list_tags, get_tags_for_task, tag_task,
    untag_task, delete_tag
DEPENDENCIES:
  - kanban.core.repository (BoardRepository, ColumnRepository, TaskRepository, TagRepository)
  - kanban.core.models (Board, Column, Task, Tag, Priority)
  - kanban.core.exceptions (ValidationError)
  - kanban.core.constants (limits and defaults)
  - datetime, logging (stdlib)
NOTES:
  - All mutating operations validate first and raise ValidationError before any write
  - StorageError from the repository layer propagates unchanged
  - No direct SQL (use repository layer)
  - Column position on create = number of columns in the board + 1
  - Task position on create/move = max position in the column + 1 (always appended)
  - Vacated positions are never compacted automatically (see compact_positions)
"""

import logging
from datetime import date, datetime
from typing import List, Optional, Union

from .constants import (
    BOARD_NAME_MAX_LENGTH,
    COLOR_PATTERN,
    COLUMN_NAME_MAX_LENGTH,
    DEFAULT_COLUMN_COLOR,
    DEFAULT_COLUMNS,
    FIRST_POSITION,
    TAG_NAME_MAX_LENGTH,
    TASK_TITLE_MAX_LENGTH,
)
from .exceptions import ValidationError
from .models import Board, Column, Priority, Tag, Task
from .repository import BoardRepository, ColumnRepository, TagRepository, TaskRepository

logger = logging.getLogger(__name__)


# --- Validation helpers ---


def _validate_name(value: Optional[str], label: str, max_length: int) -> None:
    if value is None or not value.strip():
        raise ValidationError(f"{label} cannot be empty")
    if len(value) > max_length:
        raise ValidationError(f"{label} cannot be longer than {max_length} characters")


def _validate_color(color: Optional[str]) -> None:
    if color is None or not COLOR_PATTERN.fullmatch(color):
        raise ValidationError("Color must be in hex format (#RRGGBB)")


def _parse_due_date(due_date: Union[date, str, None]) -> Optional[str]:
    """Normalize a due date to YYYY-MM-DD text (None stays None)."""
    if due_date is None:
        return None
    if isinstance(due_date, datetime):
        return due_date.date().isoformat()
    if isinstance(due_date, date):
        return due_date.isoformat()
    try:
        return date.fromisoformat(due_date).isoformat()
    except (TypeError, ValueError):
        raise ValidationError("Due date must be in ISO format (YYYY-MM-DD)")


def _parse_priority(priority: Union[Priority, str, None]) -> Priority:
    if isinstance(priority, Priority):
        return priority
    try:
        return Priority(priority.strip().upper())
    except (AttributeError, ValueError):
        choices = ", ".join(p.value for p in Priority)
        raise ValidationError(f"Priority must be one of: {choices}")


def _now() -> str:
    return datetime.now().isoformat()


# --- Boards ---


class BoardService:
    """Board lifecycle: creation with default columns, rename, delete."""

    def __init__(
        self,
        boards: BoardRepository,
        columns: ColumnRepository,
        tasks: TaskRepository,
        tags: TagRepository,
    ):
        self.boards = boards
        self.columns = columns
        self.tasks = tasks
        self.tags = tags

    def create_board(self, name: Optional[str]) -> Board:
        """
        Create a new board with the default columns.

        Args:
            name: Board name (required, at most 100 characters)

        Returns:
            The new Board, re-loaded with its three columns attached

        Raises:
            ValidationError: If name is empty, whitespace-only, or too long

        Notes:
            - Default columns: TODO (#FF6B6B), IN PROGRESS (#4ECDC4), DONE (#45B7D1)
              at positions 1, 2, 3
        """
        _validate_name(name, "Board name", BOARD_NAME_MAX_LENGTH)

        board = self.boards.save(Board(id=None, name=name, created_at=_now()))
        self._create_default_columns(board.id)
        logger.info("Created board %s (%r)", board.id, name)

        return self.get_board_with_columns(board.id)

    def get_board_with_columns(self, board_id: int) -> Optional[Board]:
        """
        Get a board with its columns ordered by position.

        Returns:
            Board object if found, None otherwise (never raises for a missing board)
        """
        board = self.boards.find_by_id(board_id)
        if board is not None:
            board.columns = self.columns.find_by_board_id(board_id)
        return board

    def get_all_boards(self) -> List[Board]:
        """List all boards, newest first (columns are not attached)."""
        return self.boards.find_all()

    def update_board_name(self, board_id: int, name: Optional[str]) -> Board:
        """
        Rename a board.

        Raises:
            ValidationError: If name is invalid or the board doesn't exist
        """
        _validate_name(name, "Board name", BOARD_NAME_MAX_LENGTH)

        board = self.boards.find_by_id(board_id)
        if board is None:
            raise ValidationError(f"Board not found with ID: {board_id}")

        board.name = name
        self.boards.update(board)
        logger.info("Renamed board %s to %r", board_id, name)
        return board

    def delete_board(self, board_id: int, cascade: bool = False) -> None:
        """
        Delete a board by ID.

        Args:
            board_id: ID of board to delete (a missing ID is not an error)
            cascade: Also delete its columns, their tasks, and the tasks' tag links

        Notes:
            - Without cascade, child columns and tasks are left in place
        """
        if cascade:
            for column in self.columns.find_by_board_id(board_id):
                self.tags.detach_all_from_column(column.id)
                self.tasks.delete_by_column_id(column.id)
            self.columns.delete_by_board_id(board_id)

        self.boards.delete_by_id(board_id)
        logger.info("Deleted board %s (cascade=%s)", board_id, cascade)

    def _create_default_columns(self, board_id: int) -> None:
        for position, (name, color) in enumerate(DEFAULT_COLUMNS, start=FIRST_POSITION):
            self.columns.save(
                Column(id=None, board_id=board_id, name=name, position=position, color=color)
            )


# --- Columns ---


class ColumnService:
    """Column management within a board."""

    def __init__(
        self,
        columns: ColumnRepository,
        boards: BoardRepository,
        tasks: TaskRepository,
        tags: TagRepository,
    ):
        self.columns = columns
        self.boards = boards
        self.tasks = tasks
        self.tags = tags

    def add_column(
        self,
        board_id: int,
        name: Optional[str],
        color: Optional[str] = None,
    ) -> Column:
        """
        Append a new column to a board.

        Args:
            board_id: Board to add the column to
            name: Column name (required, at most 50 characters)
            color: Optional #RRGGBB color (defaults to #808080)

        Returns:
            Newly created Column at position (existing column count + 1)

        Raises:
            ValidationError: If name or color is invalid, or the board doesn't exist
        """
        _validate_name(name, "Column name", COLUMN_NAME_MAX_LENGTH)
        self._require_board(board_id)
        if color is not None:
            _validate_color(color)

        position = self.columns.count_by_board_id(board_id) + 1
        column = self.columns.save(
            Column(
                id=None,
                board_id=board_id,
                name=name,
                position=position,
                color=color or DEFAULT_COLUMN_COLOR,
            )
        )
        logger.info("Added column %s (%r) to board %s at %s", column.id, name, board_id, position)
        return column

    def get_column(self, column_id: int) -> Optional[Column]:
        return self.columns.find_by_id(column_id)

    def get_columns_by_board(self, board_id: int) -> List[Column]:
        """List a board's columns ordered by position."""
        return self.columns.find_by_board_id(board_id)

    def update_column_name(self, column_id: int, name: Optional[str]) -> Column:
        _validate_name(name, "Column name", COLUMN_NAME_MAX_LENGTH)
        column = self._require_column(column_id)

        column.name = name
        self.columns.update(column)
        logger.info("Renamed column %s to %r", column_id, name)
        return column

    def update_column_color(self, column_id: int, color: Optional[str]) -> Column:
        _validate_color(color)
        column = self._require_column(column_id)

        column.color = color
        self.columns.update(column)
        logger.info("Changed color of column %s to %s", column_id, color)
        return column

    def delete_column(self, column_id: int, cascade: bool = False) -> None:
        """
        Delete a column.

        Args:
            column_id: ID of column to delete
            cascade: Also delete its tasks and their tag links

        Raises:
            ValidationError: If the column doesn't exist

        Notes:
            - Without cascade, tasks in the column are left in place
        """
        self._require_column(column_id)

        if cascade:
            self.tags.detach_all_from_column(column_id)
            self.tasks.delete_by_column_id(column_id)

        self.columns.delete_by_id(column_id)
        logger.info("Deleted column %s (cascade=%s)", column_id, cascade)

    def compact_positions(self, board_id: int) -> List[Column]:
        """
        Renumber a board's columns to 1..N, keeping their order.

        Returns:
            The board's columns after renumbering
        """
        columns = self.columns.find_by_board_id(board_id)
        for position, column in enumerate(columns, start=FIRST_POSITION):
            if column.position != position:
                column.position = position
                self.columns.update(column)
        return columns

    def _require_board(self, board_id: int) -> Board:
        board = self.boards.find_by_id(board_id)
        if board is None:
            raise ValidationError(f"Board not found with ID: {board_id}")
        return board

    def _require_column(self, column_id: int) -> Column:
        column = self.columns.find_by_id(column_id)
        if column is None:
            raise ValidationError(f"Column not found with ID: {column_id}")
        return column


# --- Tasks ---


class TaskService:
    """Task creation, editing, and movement between columns."""

    def __init__(
        self,
        tasks: TaskRepository,
        columns: ColumnRepository,
        tags: TagRepository,
    ):
        self.tasks = tasks
        self.columns = columns
        self.tags = tags

    def create_task(
        self,
        column_id: int,
        title: Optional[str],
        description: Optional[str] = None,
        due_date: Union[date, str, None] = None,
    ) -> Task:
        """
        Create a new task at the end of a column.

        Args:
            column_id: Column to place the task in
            title: Task title (required, at most 200 characters)
            description: Optional task description
            due_date: Optional due date (date or YYYY-MM-DD)

        Returns:
            Newly created Task with priority MEDIUM

        Raises:
            ValidationError: If title or due date is invalid, or the column doesn't exist

        Notes:
            - Position = max existing position in the column + 1 (1 if empty)
        """
        _validate_name(title, "Task title", TASK_TITLE_MAX_LENGTH)
        self._require_column(column_id)
        due = _parse_due_date(due_date)

        task = Task(
            id=None,
            column_id=column_id,
            title=title,
            description=description,
            priority=Priority.MEDIUM,
            position=self.tasks.next_position(column_id),
            created_at=_now(),
            due_date=due,
        )
        task = self.tasks.save(task)
        logger.info("Created task %s in column %s at %s", task.id, column_id, task.position)
        return task

    def get_task(self, task_id: int) -> Optional[Task]:
        """
        Get a task with its tags.

        Returns:
            Task object if found, None otherwise
        """
        task = self.tasks.find_by_id(task_id)
        if task is not None:
            task.tags = self.tags.find_by_task_id(task_id)
        return task

    def get_tasks_by_column(self, column_id: int) -> List[Task]:
        """List a column's tasks ordered by position."""
        return self.tasks.find_by_column_id(column_id)

    def update_task(
        self,
        task_id: int,
        title: Optional[str],
        description: Optional[str],
    ) -> Task:
        """
        Replace a task's title and description.

        Raises:
            ValidationError: If title is invalid or the task doesn't exist

        Notes:
            - Column and position are preserved
        """
        _validate_name(title, "Task title", TASK_TITLE_MAX_LENGTH)
        task = self._require_task(task_id)

        task.title = title
        task.description = description
        self.tasks.update(task)
        logger.info("Updated task %s", task_id)
        return task

    def move_task(self, task_id: int, target_column_id: int) -> Task:
        """
        Move a task to the end of another column.

        Args:
            task_id: ID of task to move
            target_column_id: ID of destination column

        Returns:
            Updated Task object

        Raises:
            ValidationError: If the target column or the task doesn't exist

        Notes:
            - New position = max position in target column + 1
            - Remaining tasks in the source column keep their positions
        """
        self._require_column(target_column_id)
        task = self._require_task(task_id)

        source_column_id = task.column_id
        task.position = self.tasks.next_position(target_column_id)
        task.column_id = target_column_id
        self.tasks.update(task)
        logger.info(
            "Moved task %s from column %s to column %s at %s",
            task_id, source_column_id, target_column_id, task.position,
        )
        return task

    def delete_task(self, task_id: int) -> None:
        """
        Delete a task permanently (its tag links go with it).

        Raises:
            ValidationError: If the task doesn't exist
        """
        self._require_task(task_id)

        self.tags.detach_all_from_task(task_id)
        self.tasks.delete_by_id(task_id)
        logger.info("Deleted task %s", task_id)

    def set_task_priority(self, task_id: int, priority: Union[Priority, str]) -> Task:
        """
        Change only the priority of a task.

        Args:
            priority: Priority member or its name (case-insensitive)

        Raises:
            ValidationError: If the priority is unknown or the task doesn't exist
        """
        value = _parse_priority(priority)
        task = self._require_task(task_id)

        task.priority = value
        self.tasks.update(task)
        logger.info("Set priority of task %s to %s", task_id, value.value)
        return task

    def set_task_due_date(self, task_id: int, due_date: Union[date, str, None]) -> Task:
        """Set or clear (None) a task's due date."""
        due = _parse_due_date(due_date)
        task = self._require_task(task_id)

        task.due_date = due
        self.tasks.update(task)
        logger.info("Set due date of task %s to %s", task_id, due)
        return task

    def compact_positions(self, column_id: int) -> List[Task]:
        """
        Renumber a column's tasks to 1..N, keeping their order.

        Raises:
            ValidationError: If the column doesn't exist
        """
        self._require_column(column_id)

        tasks = self.tasks.find_by_column_id(column_id)
        for position, task in enumerate(tasks, start=FIRST_POSITION):
            if task.position != position:
                task.position = position
                self.tasks.update(task)
        return tasks

    def _require_column(self, column_id: int) -> Column:
        column = self.columns.find_by_id(column_id)
        if column is None:
            raise ValidationError(f"Column not found with ID: {column_id}")
        return column

    def _require_task(self, task_id: int) -> Task:
        task = self.tasks.find_by_id(task_id)
        if task is None:
            raise ValidationError(f"Task not found with ID: {task_id}")
        return task


# --- Tags ---


class TagService:
    """Tag catalogue and task tagging."""

    def __init__(self, tags: TagRepository, tasks: TaskRepository):
        self.tags = tags
        self.tasks = tasks

    def create_tag(self, name: Optional[str], color: Optional[str]) -> Tag:
        """
        Create a new tag.

        Raises:
            ValidationError: If name is invalid or taken, or color is malformed
        """
        _validate_name(name, "Tag name", TAG_NAME_MAX_LENGTH)
        _validate_color(color)
        if self.tags.find_by_name(name) is not None:
            raise ValidationError(f"Tag already exists: {name}")

        tag = self.tags.save(Tag(id=None, name=name, color=color))
        logger.info("Created tag %s (%r)", tag.id, name)
        return tag

    def get_tag(self, tag_id: int) -> Optional[Tag]:
        return self.tags.find_by_id(tag_id)

    def list_tags(self) -> List[Tag]:
        """List all tags ordered by name."""
        return self.tags.find_all()

    def get_tags_for_task(self, task_id: int) -> List[Tag]:
        return self.tags.find_by_task_id(task_id)

    def tag_task(self, task_id: int, tag_id: int) -> None:
        """Attach a tag to a task (no-op if already attached)."""
        self._require_task(task_id)
        self._require_tag(tag_id)

        self.tags.attach(task_id, tag_id)
        logger.info("Tagged task %s with tag %s", task_id, tag_id)

    def untag_task(self, task_id: int, tag_id: int) -> None:
        self._require_task(task_id)
        self._require_tag(tag_id)

        self.tags.detach(task_id, tag_id)
        logger.info("Removed tag %s from task %s", tag_id, task_id)

    def delete_tag(self, tag_id: int) -> None:
        self._require_tag(tag_id)

        self.tags.delete_by_id(tag_id)
        logger.info("Deleted tag %s", tag_id)

    def _require_task(self, task_id: int) -> Task:
        task = self.tasks.find_by_id(task_id)
        if task is None:
            raise ValidationError(f"Task not found with ID: {task_id}")
        return task

    def _require_tag(self, tag_id: int) -> Tag:
        tag = self.tags.find_by_id(tag_id)
        if tag is None:
            raise ValidationError(f"Tag not found with ID: {tag_id}")
        return tag
