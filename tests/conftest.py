"""Shared pytest configuration and fixtures for tests."""

import sys
import io
from pathlib import Path

import pytest

# Fix Windows console encoding
if sys.platform == "win32":
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from kanban.core.context import Services  # noqa: E402
from kanban.core.database import Database  # noqa: E402


@pytest.fixture
def db_path(tmp_path):
    """Temporary database file for a single test."""
    return str(tmp_path / "test_kanban.db")


@pytest.fixture
def db(db_path):
    """Initialized database handle, closed after the test."""
    database = Database(db_path)
    database.initialize()
    yield database
    database.close()


@pytest.fixture
def services(db):
    """Services wired to the temporary database."""
    return Services.from_database(db)


@pytest.fixture
def board(services):
    """A board with its three default columns."""
    return services.boards.create_board("Test Board")


@pytest.fixture
def todo(board):
    return board.columns[0]


@pytest.fixture
def in_progress(board):
    return board.columns[1]


@pytest.fixture
def done(board):
    return board.columns[2]
