"""
Test suite for the command-line front end

Runs commands in-process with typer's CliRunner against a temporary database.
"""

import json

import pytest
from typer.testing import CliRunner

from kanban.cli.main import app
from kanban.config import Config
from kanban.core.context import open_services

runner = CliRunner()


@pytest.fixture
def cli(db_path):
    """Invoke the CLI against the temporary database."""

    def invoke(*args, input=None):
        return runner.invoke(app, ["--db", db_path, *args], input=input)

    return invoke


@pytest.fixture
def seeded(db_path):
    """A board (with default columns) and one task, created through the services."""
    with open_services(Config(db_path=db_path)) as services:
        board = services.boards.create_board("CLI Board")
        todo, in_progress = board.columns[0], board.columns[1]
        task = services.tasks.create_task(todo.id, "Seeded task", "from fixture")
    return {"board": board, "todo": todo, "in_progress": in_progress, "task": task}


def _load(db_path):
    return open_services(Config(db_path=db_path))


# --- System ---


def test_version(cli):
    result = cli("version")

    assert result.exit_code == 0
    assert "Kanban v" in result.output


# --- Boards ---


def test_board_add_json(cli):
    result = cli("board", "add", "Release", "--json")

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["name"] == "Release"
    assert [c["name"] for c in data["columns"]] == ["TODO", "IN PROGRESS", "DONE"]


def test_board_add_empty_name_fails(cli, db_path):
    result = cli("board", "add", "   ")

    assert result.exit_code == 1
    with _load(db_path) as services:
        assert services.boards.get_all_boards() == []


def test_board_ls_json(cli, seeded):
    result = cli("board", "ls", "--json")

    assert result.exit_code == 0
    assert [b["name"] for b in json.loads(result.output)] == ["CLI Board"]


def test_board_show_json_includes_tasks(cli, seeded):
    result = cli("board", "show", str(seeded["board"].id), "--json")

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["columns"][0]["tasks"][0]["title"] == "Seeded task"
    assert data["columns"][1]["tasks"] == []


def test_board_show_missing(cli):
    result = cli("board", "show", "999")

    assert result.exit_code == 1


def test_board_rename(cli, seeded, db_path):
    board_id = seeded["board"].id

    result = cli("board", "rename", str(board_id), "Renamed")

    assert result.exit_code == 0
    with _load(db_path) as services:
        assert services.boards.get_board_with_columns(board_id).name == "Renamed"


def test_board_rm_cascade(cli, seeded, db_path):
    result = cli("board", "rm", str(seeded["board"].id), "--cascade", "--yes")

    assert result.exit_code == 0
    with _load(db_path) as services:
        assert services.boards.get_all_boards() == []
        assert services.tasks.get_task(seeded["task"].id) is None


def test_board_rm_declined(cli, seeded, db_path):
    result = cli("board", "rm", str(seeded["board"].id), input="n\n")

    assert result.exit_code == 1
    with _load(db_path) as services:
        assert len(services.boards.get_all_boards()) == 1


# --- Columns ---


def test_column_add_position(cli, seeded):
    result = cli("column", "add", str(seeded["board"].id), "TESTING", "--json")

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["position"] == 4
    assert data["color"] == "#808080"


def test_column_add_bad_color(cli, seeded):
    result = cli("column", "add", str(seeded["board"].id), "X", "--color", "blue")

    assert result.exit_code == 1


def test_column_rename_and_color(cli, seeded, db_path):
    column_id = seeded["todo"].id

    assert cli("column", "rename", str(column_id), "Backlog").exit_code == 0
    assert cli("column", "color", str(column_id), "#010203").exit_code == 0

    with _load(db_path) as services:
        column = services.columns.get_column(column_id)
        assert (column.name, column.color) == ("Backlog", "#010203")


def test_column_rm_missing(cli):
    result = cli("column", "rm", "4242", "--yes")

    assert result.exit_code == 1


def test_column_ls_json(cli, seeded):
    result = cli("column", "ls", str(seeded["board"].id), "--json")

    assert result.exit_code == 0
    assert [c["position"] for c in json.loads(result.output)] == [1, 2, 3]


# --- Tasks ---


def test_task_add_and_ls(cli, seeded):
    todo_id = str(seeded["todo"].id)

    added = cli("task", "add", todo_id, "Second", "--due", "2026-12-01", "--json")
    listed = cli("task", "ls", todo_id, "--json")

    assert added.exit_code == 0
    assert json.loads(added.output)["position"] == 2
    assert [t["title"] for t in json.loads(listed.output)] == ["Seeded task", "Second"]


def test_task_add_missing_column(cli):
    result = cli("task", "add", "999", "Nowhere")

    assert result.exit_code == 1


def test_task_mv(cli, seeded, db_path):
    task_id = seeded["task"].id

    result = cli("task", "mv", str(task_id), str(seeded["in_progress"].id))

    assert result.exit_code == 0
    with _load(db_path) as services:
        task = services.tasks.get_task(task_id)
        assert task.column_id == seeded["in_progress"].id
        assert task.position == 1


def test_task_edit_keeps_description(cli, seeded, db_path):
    task_id = seeded["task"].id

    result = cli("task", "edit", str(task_id), "Edited title")

    assert result.exit_code == 0
    with _load(db_path) as services:
        task = services.tasks.get_task(task_id)
        assert task.title == "Edited title"
        assert task.description == "from fixture"


def test_task_priority_and_due(cli, seeded, db_path):
    task_id = str(seeded["task"].id)

    assert cli("task", "priority", task_id, "high").exit_code == 0
    assert cli("task", "due", task_id, "2027-03-01").exit_code == 0
    assert cli("task", "priority", task_id, "someday").exit_code == 1

    shown = json.loads(cli("task", "show", task_id, "--json").output)
    assert shown["priority"] == "HIGH"
    assert shown["due_date"] == "2027-03-01"

    assert cli("task", "due", task_id, "none").exit_code == 0
    assert json.loads(cli("task", "show", task_id, "--json").output)["due_date"] is None


def test_task_show_rich(cli, seeded):
    result = cli("task", "show", str(seeded["task"].id))

    assert result.exit_code == 0
    assert "Seeded task" in result.output


def test_task_rm(cli, seeded, db_path):
    result = cli("task", "rm", str(seeded["task"].id), "-y")

    assert result.exit_code == 0
    with _load(db_path) as services:
        assert services.tasks.get_task(seeded["task"].id) is None


def test_task_rm_missing(cli):
    assert cli("task", "rm", "31337", "-y").exit_code == 1


# --- Tags ---


def test_tag_flow(cli, seeded):
    task_id = str(seeded["task"].id)

    tag = json.loads(cli("tag", "add", "bug", "#FF0000", "--json").output)
    assert cli("task", "tag", task_id, str(tag["id"])).exit_code == 0

    shown = json.loads(cli("task", "show", task_id, "--json").output)
    assert [t["name"] for t in shown["tags"]] == ["bug"]

    assert cli("tag", "add", "bug", "#00FF00").exit_code == 1
    assert cli("task", "untag", task_id, str(tag["id"])).exit_code == 0
    assert cli("tag", "rm", str(tag["id"]), "-y").exit_code == 0
    assert json.loads(cli("tag", "ls", "--json").output) == []


# --- Bracketed names are printed literally ---


def test_task_title_with_closing_tag(cli, seeded):
    todo_id = str(seeded["todo"].id)
    title = "fix [/] bracket parsing"

    added = cli("task", "add", todo_id, title, "--desc", "see [/red] too")
    assert added.exit_code == 0
    assert title in added.output

    listed = cli("task", "ls", todo_id)
    assert listed.exit_code == 0
    assert title in listed.output

    task_id = json.loads(cli("task", "ls", todo_id, "--json").output)[-1]["id"]
    shown = cli("task", "show", str(task_id))
    assert shown.exit_code == 0
    assert title in shown.output
    assert "see [/red] too" in shown.output


def test_board_name_with_closing_tag(cli):
    name = "[/red] sprint"

    added = cli("board", "add", name)
    assert added.exit_code == 0
    assert name in added.output

    listed = cli("board", "ls")
    assert listed.exit_code == 0
    assert name in listed.output

    board_id = json.loads(cli("board", "ls", "--json").output)[0]["id"]
    assert cli("board", "show", str(board_id)).exit_code == 0


def test_column_and_tag_names_with_closing_tag(cli, seeded):
    column_id = str(seeded["todo"].id)

    renamed = cli("column", "rename", column_id, "[/b] col")
    assert renamed.exit_code == 0
    assert "[/b] col" in cli("column", "ls", str(seeded["board"].id)).output

    assert cli("tag", "add", "[/] tag", "#FF0000").exit_code == 0
    listed = cli("tag", "ls")
    assert listed.exit_code == 0
    assert "[/] tag" in listed.output


# --- Failures outside validation ---


def test_unknown_log_level(db_path):
    result = runner.invoke(app, ["--db", db_path, "--log-level", "verbose", "board", "ls"])

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "Log level must be one of" in result.output


def test_unreadable_store_reports_storage_error(tmp_path):
    path = tmp_path / "not_a_db.db"
    path.write_bytes(b"this is not a sqlite database\n" * 64)

    result = runner.invoke(app, ["--db", str(path), "board", "ls"])

    assert result.exit_code == 1
    assert "Storage error:" in result.output
