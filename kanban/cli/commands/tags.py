"""
FILE: kanban/cli/commands/tags.py
PURPOSE: Tag commands (tag add, ls, rm)
"""

import json

import typer
from rich.markup import escape

from ..main import tag_app, console, error_console, get_services, print_json, confirm_or_abort
from ...core.exceptions import KanbanError, ValidationError
from ...formatting import TagFormatter


@tag_app.command("add")
def tag_add(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Tag name (unique)"),
    color: str = typer.Argument(..., help="Hex color #RRGGBB"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Create a tag.

    Example:
        kanban tag add bug "#FF0000"
    """
    try:
        tag = get_services(ctx).tags.create_tag(name, color)

        if json_output:
            print_json(tag.to_json())
        else:
            console.print(f"[green]✓ Created tag [bold]#{tag.id}[/bold]:[/green] {escape(tag.name)}")

    except ValidationError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except KanbanError as e:
        error_console.print(f"[red]Storage error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@tag_app.command("ls")
def tag_ls(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """List tags by name."""
    try:
        tags = get_services(ctx).tags.list_tags()

        if json_output:
            print_json(json.dumps([t.to_dict() for t in tags], indent=2))
            return

        if not tags:
            console.print("[dim]No tags found[/dim]")
            return

        console.print(TagFormatter.create_table(tags))

    except KanbanError as e:
        error_console.print(f"[red]Storage error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@tag_app.command("rm")
def tag_rm(
    ctx: typer.Context,
    tag_id: int = typer.Argument(..., help="Tag ID"),
    yes: bool = typer.Option(False, "-y", "--yes", help="Skip confirmation prompt"),
):
    """Delete a tag and remove it from every task."""
    confirm_or_abort(f"Delete tag {tag_id}?", yes)
    try:
        get_services(ctx).tags.delete_tag(tag_id)
        console.print(f"[green]✓ Deleted tag #{tag_id}[/green]")

    except ValidationError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except KanbanError as e:
        error_console.print(f"[red]Storage error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
