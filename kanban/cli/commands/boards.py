"""
FILE: kanban/cli/commands/boards.py
PURPOSE: Board commands (board add, ls, show, rename, rm)
"""

import json

import typer
from rich.markup import escape

from ..main import board_app, console, error_console, get_services, print_json, confirm_or_abort
from ...core.exceptions import KanbanError, ValidationError
from ...formatting import BoardFormatter


@board_app.command("add")
def board_add(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Board name"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Create a new board with TODO, IN PROGRESS, and DONE columns.

    Example:
        kanban board add "Release 2.0"
    """
    try:
        board = get_services(ctx).boards.create_board(name)

        if json_output:
            print_json(board.to_json())
        else:
            console.print(f"[green]✓ Created board [bold]#{board.id}[/bold]:[/green] {escape(board.name)}")
            for column in board.columns:
                console.print(f"  [dim]#{column.id}[/dim] {escape(column.name)}")

    except ValidationError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except KanbanError as e:
        error_console.print(f"[red]Storage error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@board_app.command("ls")
def board_ls(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """List boards, newest first."""
    try:
        boards = get_services(ctx).boards.get_all_boards()

        if json_output:
            print_json(json.dumps([b.to_dict() for b in boards], indent=2))
            return

        if not boards:
            console.print("[dim]No boards found[/dim]")
            return

        console.print(BoardFormatter.create_table(boards))
        console.print(f"\n[dim]Total: {len(boards)} board(s)[/dim]")

    except KanbanError as e:
        error_console.print(f"[red]Storage error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@board_app.command("show")
def board_show(
    ctx: typer.Context,
    board_id: int = typer.Argument(..., help="Board ID"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Show a board with its columns and tasks."""
    try:
        services = get_services(ctx)
        board = services.boards.get_board_with_columns(board_id)
        if board is None:
            error_console.print(f"[red]Error:[/red] Board not found with ID: {board_id}")
            raise typer.Exit(1)

        tasks_by_column = {
            column.id: services.tasks.get_tasks_by_column(column.id)
            for column in board.columns
        }

        if json_output:
            data = board.to_dict()
            for column_data in data["columns"]:
                column_data["tasks"] = [t.to_dict() for t in tasks_by_column[column_data["id"]]]
            print_json(json.dumps(data, indent=2))
        else:
            console.print(BoardFormatter.create_layout(board, tasks_by_column))

    except KanbanError as e:
        error_console.print(f"[red]Storage error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@board_app.command("rename")
def board_rename(
    ctx: typer.Context,
    board_id: int = typer.Argument(..., help="Board ID"),
    name: str = typer.Argument(..., help="New board name"),
):
    """Rename a board."""
    try:
        board = get_services(ctx).boards.update_board_name(board_id, name)
        console.print(f"[green]✓ Renamed board [bold]#{board.id}[/bold]:[/green] {escape(board.name)}")

    except ValidationError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except KanbanError as e:
        error_console.print(f"[red]Storage error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@board_app.command("rm")
def board_rm(
    ctx: typer.Context,
    board_id: int = typer.Argument(..., help="Board ID"),
    cascade: bool = typer.Option(False, "--cascade", help="Also delete the board's columns and tasks"),
    yes: bool = typer.Option(False, "-y", "--yes", help="Skip confirmation prompt"),
):
    """
    Delete a board permanently.

    Example:
        kanban board rm 3 --cascade -y
    """
    confirm_or_abort(f"Delete board {board_id}?", yes)
    try:
        get_services(ctx).boards.delete_board(board_id, cascade=cascade)
        console.print(f"[green]✓ Deleted board #{board_id}[/green]")

    except KanbanError as e:
        error_console.print(f"[red]Storage error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
