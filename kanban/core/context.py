"""
FILE: kanban/core/context.py
PURPOSE: Wire the storage handle, repositories, and services together
EXPORTS:
  - Services (dataclass)
  - open_services(config) -> Services
DEPENDENCIES:
  - kanban.config (Config)
  - kanban.core.database (Database)
  - kanban.core.repository, kanban.core.service
NOTES:
  - The caller owns the returned Services and must close() it
  - Schema is initialized on open
"""

from dataclasses import dataclass

from ..config import Config
from .database import Database
from .exceptions import StorageError
from .repository import BoardRepository, ColumnRepository, TagRepository, TaskRepository
from .service import BoardService, ColumnService, TagService, TaskService


@dataclass
class Services:
    """The service layer plus the handle it runs on."""

    db: Database
    boards: BoardService
    columns: ColumnService
    tasks: TaskService
    tags: TagService

    @classmethod
    def from_database(cls, db: Database) -> "Services":
        board_repo = BoardRepository(db)
        column_repo = ColumnRepository(db)
        task_repo = TaskRepository(db)
        tag_repo = TagRepository(db)

        return cls(
            db=db,
            boards=BoardService(board_repo, column_repo, task_repo, tag_repo),
            columns=ColumnService(column_repo, board_repo, task_repo, tag_repo),
            tasks=TaskService(task_repo, column_repo, tag_repo),
            tags=TagService(tag_repo, task_repo),
        )

    def close(self) -> None:
        self.db.close()

    def __enter__(self) -> "Services":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def open_services(config: Config) -> Services:
    """Open the store named by config, create tables, and build the services."""
    db = Database(config.db_path)
    try:
        db.initialize()
    except StorageError:
        db.close()
        raise
    return Services.from_database(db)
