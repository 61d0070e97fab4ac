"""
FILE: kanban/cli/commands/columns.py
PURPOSE: Column commands (column add, ls, rename, color, rm, compact)
"""

import json
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from ..main import column_app, console, error_console, get_services, print_json, confirm_or_abort
from ...core.exceptions import KanbanError, ValidationError


@column_app.command("add")
def column_add(
    ctx: typer.Context,
    board_id: int = typer.Argument(..., help="Board ID"),
    name: str = typer.Argument(..., help="Column name"),
    color: Optional[str] = typer.Option(None, "--color", "-c", help="Hex color #RRGGBB (default: #808080)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Append a column to a board.

    Example:
        kanban column add 1 TESTING --color "#AABBCC"
    """
    try:
        column = get_services(ctx).columns.add_column(board_id, name, color)

        if json_output:
            print_json(column.to_json())
        else:
            console.print(
                f"[green]✓ Added column [bold]#{column.id}[/bold]:[/green] {escape(column.name)} "
                f"[dim](position {column.position})[/dim]"
            )

    except ValidationError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except KanbanError as e:
        error_console.print(f"[red]Storage error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@column_app.command("ls")
def column_ls(
    ctx: typer.Context,
    board_id: int = typer.Argument(..., help="Board ID"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """List a board's columns in display order."""
    try:
        columns = get_services(ctx).columns.get_columns_by_board(board_id)

        if json_output:
            print_json(json.dumps([c.to_dict() for c in columns], indent=2))
            return

        if not columns:
            console.print("[dim]No columns found[/dim]")
            return

        table = Table(title=f"Columns of board #{board_id}", header_style="bold cyan")
        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("Pos", style="dim")
        table.add_column("Name")
        table.add_column("Color")
        for column in columns:
            table.add_row(
                str(column.id),
                str(column.position),
                f"[{column.color}]{escape(column.name)}[/{column.color}]",
                column.color,
            )
        console.print(table)

    except KanbanError as e:
        error_console.print(f"[red]Storage error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@column_app.command("rename")
def column_rename(
    ctx: typer.Context,
    column_id: int = typer.Argument(..., help="Column ID"),
    name: str = typer.Argument(..., help="New column name"),
):
    """Rename a column."""
    try:
        column = get_services(ctx).columns.update_column_name(column_id, name)
        console.print(f"[green]✓ Renamed column [bold]#{column.id}[/bold]:[/green] {escape(column.name)}")

    except ValidationError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except KanbanError as e:
        error_console.print(f"[red]Storage error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@column_app.command("color")
def column_color(
    ctx: typer.Context,
    column_id: int = typer.Argument(..., help="Column ID"),
    color: str = typer.Argument(..., help="Hex color #RRGGBB"),
):
    """Change a column's color."""
    try:
        column = get_services(ctx).columns.update_column_color(column_id, color)
        console.print(f"[green]✓ Column [bold]#{column.id}[/bold] color:[/green] {column.color}")

    except ValidationError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except KanbanError as e:
        error_console.print(f"[red]Storage error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@column_app.command("rm")
def column_rm(
    ctx: typer.Context,
    column_id: int = typer.Argument(..., help="Column ID"),
    cascade: bool = typer.Option(False, "--cascade", help="Also delete the column's tasks"),
    yes: bool = typer.Option(False, "-y", "--yes", help="Skip confirmation prompt"),
):
    """Delete a column permanently."""
    confirm_or_abort(f"Delete column {column_id}?", yes)
    try:
        get_services(ctx).columns.delete_column(column_id, cascade=cascade)
        console.print(f"[green]✓ Deleted column #{column_id}[/green]")

    except ValidationError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except KanbanError as e:
        error_console.print(f"[red]Storage error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@column_app.command("compact")
def column_compact(
    ctx: typer.Context,
    board_id: int = typer.Argument(..., help="Board ID"),
):
    """Renumber a board's column positions to 1..N."""
    try:
        columns = get_services(ctx).columns.compact_positions(board_id)
        console.print(f"[green]✓ Renumbered {len(columns)} column(s)[/green]")

    except KanbanError as e:
        error_console.print(f"[red]Storage error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
