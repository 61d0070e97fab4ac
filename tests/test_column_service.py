"""
Tests for ColumnService

Covers column positions, color validation, renames, and delete policy.
"""

import pytest

from kanban.core.exceptions import ValidationError


# --- add_column ---


def test_add_column_appends_after_defaults(services, board):
    column = services.columns.add_column(board.id, "TESTING")

    assert column.id is not None
    assert column.board_id == board.id
    assert column.position == 4
    assert column.color == "#808080"


def test_add_three_columns_sequential_positions(services, board):
    positions = [
        services.columns.add_column(board.id, name).position
        for name in ("A", "B", "C")
    ]

    assert positions == [4, 5, 6]


def test_add_column_with_color(services, board):
    column = services.columns.add_column(board.id, "Review", "#aabbcc")

    assert column.color == "#aabbcc"
    assert services.columns.get_column(column.id).color == "#aabbcc"


@pytest.mark.parametrize("color", ["red", "#FFF", "#GGGGGG", "FF6B6B", "#FF6B6B0", ""])
def test_add_column_bad_color(services, board, color):
    with pytest.raises(ValidationError) as exc_info:
        services.columns.add_column(board.id, "Review", color)

    assert str(exc_info.value) == "Color must be in hex format (#RRGGBB)"
    assert len(services.columns.get_columns_by_board(board.id)) == 3


@pytest.mark.parametrize("name", ["", None, "  "])
def test_add_column_empty_name(services, board, name):
    with pytest.raises(ValidationError) as exc_info:
        services.columns.add_column(board.id, name)

    assert str(exc_info.value) == "Column name cannot be empty"


def test_add_column_name_too_long(services, board):
    with pytest.raises(ValidationError) as exc_info:
        services.columns.add_column(board.id, "x" * 51)

    assert str(exc_info.value) == "Column name cannot be longer than 50 characters"


def test_add_column_missing_board(services):
    with pytest.raises(ValidationError) as exc_info:
        services.columns.add_column(777, "Lost")

    assert str(exc_info.value) == "Board not found with ID: 777"


def test_add_column_position_is_count_plus_one_after_gap(services, board, in_progress):
    """Deleting a column leaves a gap; the next column reuses count + 1."""
    services.columns.delete_column(in_progress.id)

    column = services.columns.add_column(board.id, "NEW")

    # Remaining positions are 1 and 3, count is 2
    assert column.position == 3


# --- get_columns_by_board ---


def test_get_columns_by_board_ordered(services, board):
    services.columns.add_column(board.id, "Extra")

    names = [c.name for c in services.columns.get_columns_by_board(board.id)]

    assert names == ["TODO", "IN PROGRESS", "DONE", "Extra"]


def test_get_columns_unknown_board_empty(services):
    assert services.columns.get_columns_by_board(5555) == []


# --- updates ---


def test_update_column_name(services, todo):
    services.columns.update_column_name(todo.id, "Backlog")

    updated = services.columns.get_column(todo.id)
    assert updated.name == "Backlog"
    assert updated.position == todo.position


def test_update_column_name_missing(services):
    with pytest.raises(ValidationError) as exc_info:
        services.columns.update_column_name(8080, "Name")

    assert str(exc_info.value) == "Column not found with ID: 8080"


def test_update_column_color(services, todo):
    services.columns.update_column_color(todo.id, "#000000")

    assert services.columns.get_column(todo.id).color == "#000000"


def test_update_column_color_invalid(services, todo):
    with pytest.raises(ValidationError):
        services.columns.update_column_color(todo.id, "black")

    assert services.columns.get_column(todo.id).color == "#FF6B6B"


def test_update_column_color_missing(services):
    with pytest.raises(ValidationError) as exc_info:
        services.columns.update_column_color(8080, "#000000")

    assert str(exc_info.value) == "Column not found with ID: 8080"


# --- delete_column ---


def test_delete_column_missing(services):
    with pytest.raises(ValidationError) as exc_info:
        services.columns.delete_column(31337)

    assert str(exc_info.value) == "Column not found with ID: 31337"


def test_delete_column_with_tasks_leaves_tasks(services, board, todo):
    task = services.tasks.create_task(todo.id, "Still here")

    services.columns.delete_column(todo.id)

    assert services.columns.get_column(todo.id) is None
    assert services.tasks.get_task(task.id).column_id == todo.id


def test_delete_column_cascade(services, board, todo, done):
    tag = services.tags.create_tag("ops", "#00FF00")
    doomed = services.tasks.create_task(todo.id, "Doomed")
    survivor = services.tasks.create_task(done.id, "Survivor")
    services.tags.tag_task(doomed.id, tag.id)
    services.tags.tag_task(survivor.id, tag.id)

    services.columns.delete_column(todo.id, cascade=True)

    assert services.tasks.get_task(doomed.id) is None
    assert [t.name for t in services.tasks.get_task(survivor.id).tags] == ["ops"]


def test_delete_column_leaves_position_gap(services, board, in_progress):
    services.columns.delete_column(in_progress.id)

    positions = [c.position for c in services.columns.get_columns_by_board(board.id)]

    assert positions == [1, 3]


# --- compact_positions ---


def test_compact_positions(services, board, in_progress):
    services.columns.delete_column(in_progress.id)

    columns = services.columns.compact_positions(board.id)

    assert [c.position for c in columns] == [1, 2]
    assert [c.name for c in services.columns.get_columns_by_board(board.id)] == ["TODO", "DONE"]
    assert [c.position for c in services.columns.get_columns_by_board(board.id)] == [1, 2]
