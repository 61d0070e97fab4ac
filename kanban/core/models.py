"""
FILE: kanban/core/models.py
PURPOSE: Domain models for boards, columns, tasks, and tags
EXPORTS:
  - Priority (enum)
  - Board (dataclass)
  - Column (dataclass)
  - Task (dataclass)
  - Tag (dataclass)
DEPENDENCIES:
  - dataclasses (stdlib)
  - enum (stdlib)
  - json (stdlib)
  - typing (stdlib)
NOTES:
  - All models have from_row() for SQLite row conversion and to_row() for the reverse
  - to_row() never includes id; the repository appends it where needed
  - All models have to_json() for serialization
  - Timestamps stored as ISO-8601 strings, due dates as YYYY-MM-DD
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
import json

from .constants import DEFAULT_COLUMN_COLOR


class Priority(str, Enum):
    """Task priority."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


@dataclass
class Tag:
    """A named, colored label that can be attached to many tasks."""

    id: Optional[int]
    name: str
    color: str

    @classmethod
    def from_row(cls, row) -> "Tag":
        """Convert SQLite row to Tag object."""
        return cls(id=row["id"], name=row["name"], color=row["color"])

    def to_row(self) -> Tuple[Any, ...]:
        return (self.name, self.color)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "color": self.color}

    def to_json(self) -> str:
        """Serialize tag to JSON string."""
        return json.dumps(self.to_dict(), indent=2)


@dataclass
class Task:
    """A unit of work that lives in exactly one column."""

    id: Optional[int]
    column_id: int
    title: str
    position: int
    description: Optional[str] = None
    priority: Optional[Priority] = Priority.MEDIUM
    created_at: Optional[str] = None
    due_date: Optional[str] = None
    tags: List[Tag] = field(default_factory=list)

    @classmethod
    def from_row(cls, row) -> "Task":
        """Convert SQLite row to Task object."""
        # priority column is nullable
        priority = Priority(row["priority"]) if row["priority"] else None

        return cls(
            id=row["id"],
            column_id=row["column_id"],
            title=row["title"],
            description=row["description"],
            priority=priority,
            position=row["position"],
            created_at=row["created_at"],
            due_date=row["due_date"],
        )

    def to_row(self) -> Tuple[Any, ...]:
        """Values in (column_id, title, description, priority, position, created_at, due_date) order."""
        return (
            self.column_id,
            self.title,
            self.description,
            self.priority.value if self.priority else None,
            self.position,
            self.created_at,
            self.due_date,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "column_id": self.column_id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority.value if self.priority else None,
            "position": self.position,
            "created_at": self.created_at,
            "due_date": self.due_date,
            "tags": [tag.to_dict() for tag in self.tags],
        }

    def to_json(self) -> str:
        """Serialize task to JSON string."""
        return json.dumps(self.to_dict(), indent=2)


@dataclass
class Column:
    """An ordered stage within a board (e.g., TODO, IN PROGRESS, DONE)."""

    id: Optional[int]
    board_id: int
    name: str
    position: int
    color: str = DEFAULT_COLUMN_COLOR

    @classmethod
    def from_row(cls, row) -> "Column":
        """Convert SQLite row to Column object."""
        return cls(
            id=row["id"],
            board_id=row["board_id"],
            name=row["name"],
            position=row["position"],
            color=row["color"] or DEFAULT_COLUMN_COLOR,
        )

    def to_row(self) -> Tuple[Any, ...]:
        """Values in (board_id, name, position, color) order."""
        return (self.board_id, self.name, self.position, self.color)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "board_id": self.board_id,
            "name": self.name,
            "position": self.position,
            "color": self.color,
        }

    def to_json(self) -> str:
        """Serialize column to JSON string."""
        return json.dumps(self.to_dict(), indent=2)


@dataclass
class Board:
    """Top-level container of columns."""

    id: Optional[int]
    name: str
    created_at: Optional[str] = None
    columns: List[Column] = field(default_factory=list)

    @classmethod
    def from_row(cls, row) -> "Board":
        """Convert SQLite row to Board object (columns are attached by the service)."""
        return cls(
            id=row["id"],
            name=row["name"],
            created_at=row["created_at"],
        )

    def to_row(self) -> Tuple[Any, ...]:
        return (self.name, self.created_at)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "created_at": self.created_at,
            "columns": [column.to_dict() for column in self.columns],
        }

    def to_json(self) -> str:
        """Serialize board (with its columns) to JSON string."""
        return json.dumps(self.to_dict(), indent=2)
