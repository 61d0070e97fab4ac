"""
FILE: kanban/core/exceptions.py
PURPOSE: Custom exception classes for error handling
EXPORTS:
  - KanbanError (base exception)
  - ValidationError
  - StorageError
DEPENDENCIES:
  - None (stdlib only)
NOTES:
  - All exceptions inherit from KanbanError for easy catching
  - Service layer raises ValidationError before touching storage
  - Database layer raises StorageError, chained from the sqlite3 error
"""


class KanbanError(Exception):
    """Base exception for all Kanban errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(KanbanError):
    """Input or domain rule violated; nothing was written."""
    pass


class StorageError(KanbanError):
    """The underlying store failed (connectivity, constraint violation, ...)."""
    pass
