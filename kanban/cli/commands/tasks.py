"""
FILE: kanban/cli/commands/tasks.py
PURPOSE: Task commands (task add, ls, show, edit, mv, rm, priority, due, tag, untag, compact)
"""

import json
from typing import Optional

import typer
from rich.markup import escape

from ..main import task_app, console, error_console, get_services, print_json, confirm_or_abort
from ...core.exceptions import KanbanError, ValidationError
from ...formatting import TaskFormatter, priority_markup


@task_app.command("add")
def task_add(
    ctx: typer.Context,
    column_id: int = typer.Argument(..., help="Column ID"),
    title: str = typer.Argument(..., help="Task title"),
    description: Optional[str] = typer.Option(None, "--desc", "-d", help="Task description"),
    due: Optional[str] = typer.Option(None, "--due", help="Due date (YYYY-MM-DD)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Create a task at the end of a column.

    Example:
        kanban task add 1 "Write documentation"
        kanban task add 1 "Fix bug" --desc "Crash on empty board" --due 2026-11-01
    """
    try:
        task = get_services(ctx).tasks.create_task(column_id, title, description, due)

        if json_output:
            print_json(task.to_json())
        else:
            console.print(f"[green]✓ Created task [bold]#{task.id}[/bold]:[/green] {escape(task.title)}")

    except ValidationError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except KanbanError as e:
        error_console.print(f"[red]Storage error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@task_app.command("ls")
def task_ls(
    ctx: typer.Context,
    column_id: int = typer.Argument(..., help="Column ID"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """List a column's tasks in display order."""
    try:
        tasks = get_services(ctx).tasks.get_tasks_by_column(column_id)

        if json_output:
            print_json(json.dumps([t.to_dict() for t in tasks], indent=2))
            return

        if not tasks:
            console.print("[dim]No tasks found[/dim]")
            return

        console.print(TaskFormatter.create_table(tasks, title=f"Tasks in column #{column_id}"))
        console.print(f"\n[dim]Total: {len(tasks)} task(s)[/dim]")

    except KanbanError as e:
        error_console.print(f"[red]Storage error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@task_app.command("show")
def task_show(
    ctx: typer.Context,
    task_id: int = typer.Argument(..., help="Task ID"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """View full task details."""
    try:
        services = get_services(ctx)
        task = services.tasks.get_task(task_id)
        if task is None:
            error_console.print(f"[red]Error:[/red] Task not found with ID: {task_id}")
            raise typer.Exit(1)

        if json_output:
            print_json(task.to_json())
        else:
            column = services.columns.get_column(task.column_id)
            console.print(TaskFormatter.create_panel(task, column.name if column else None))

    except KanbanError as e:
        error_console.print(f"[red]Storage error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@task_app.command("edit")
def task_edit(
    ctx: typer.Context,
    task_id: int = typer.Argument(..., help="Task ID"),
    title: str = typer.Argument(..., help="New task title"),
    description: Optional[str] = typer.Option(None, "--desc", "-d", help="New description (kept if omitted)"),
):
    """Update a task's title and description."""
    try:
        services = get_services(ctx)
        if description is None:
            # Keep the current description when --desc is omitted
            current = services.tasks.get_task(task_id)
            description = current.description if current else None

        task = services.tasks.update_task(task_id, title, description)
        console.print(f"[green]✓ Updated task [bold]#{task.id}[/bold]:[/green] {escape(task.title)}")

    except ValidationError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except KanbanError as e:
        error_console.print(f"[red]Storage error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@task_app.command("mv")
def task_mv(
    ctx: typer.Context,
    task_id: int = typer.Argument(..., help="Task ID"),
    column_id: int = typer.Argument(..., help="Target column ID"),
):
    """
    Move a task to the end of another column.

    Example:
        kanban task mv 5 2
    """
    try:
        services = get_services(ctx)
        task = services.tasks.move_task(task_id, column_id)
        column = services.columns.get_column(column_id)
        console.print(
            f"[green]✓ Moved task [bold]#{task.id}[/bold] to[/green] {escape(column.name)} "
            f"[dim](position {task.position})[/dim]"
        )

    except ValidationError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except KanbanError as e:
        error_console.print(f"[red]Storage error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@task_app.command("rm")
def task_rm(
    ctx: typer.Context,
    task_id: int = typer.Argument(..., help="Task ID"),
    yes: bool = typer.Option(False, "-y", "--yes", help="Skip confirmation prompt"),
):
    """Delete a task permanently."""
    confirm_or_abort(f"Delete task {task_id}?", yes)
    try:
        get_services(ctx).tasks.delete_task(task_id)
        console.print(f"[green]✓ Deleted task #{task_id}[/green]")

    except ValidationError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except KanbanError as e:
        error_console.print(f"[red]Storage error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@task_app.command("priority")
def task_priority(
    ctx: typer.Context,
    task_id: int = typer.Argument(..., help="Task ID"),
    level: str = typer.Argument(..., help="LOW, MEDIUM, or HIGH"),
):
    """Set a task's priority."""
    try:
        task = get_services(ctx).tasks.set_task_priority(task_id, level)
        console.print(
            f"[green]✓ Task [bold]#{task.id}[/bold] priority:[/green] {priority_markup(task.priority)}"
        )

    except ValidationError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except KanbanError as e:
        error_console.print(f"[red]Storage error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@task_app.command("due")
def task_due(
    ctx: typer.Context,
    task_id: int = typer.Argument(..., help="Task ID"),
    due: str = typer.Argument(..., help="Due date (YYYY-MM-DD) or 'none' to clear"),
):
    """Set or clear a task's due date."""
    try:
        value = None if due.lower() == "none" else due
        task = get_services(ctx).tasks.set_task_due_date(task_id, value)
        console.print(f"[green]✓ Task [bold]#{task.id}[/bold] due:[/green] {task.due_date or 'none'}")

    except ValidationError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except KanbanError as e:
        error_console.print(f"[red]Storage error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@task_app.command("tag")
def task_tag(
    ctx: typer.Context,
    task_id: int = typer.Argument(..., help="Task ID"),
    tag_id: int = typer.Argument(..., help="Tag ID"),
):
    """Attach a tag to a task."""
    try:
        get_services(ctx).tags.tag_task(task_id, tag_id)
        console.print(f"[green]✓ Tagged task #{task_id} with tag #{tag_id}[/green]")

    except ValidationError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except KanbanError as e:
        error_console.print(f"[red]Storage error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@task_app.command("untag")
def task_untag(
    ctx: typer.Context,
    task_id: int = typer.Argument(..., help="Task ID"),
    tag_id: int = typer.Argument(..., help="Tag ID"),
):
    """Remove a tag from a task."""
    try:
        get_services(ctx).tags.untag_task(task_id, tag_id)
        console.print(f"[green]✓ Removed tag #{tag_id} from task #{task_id}[/green]")

    except ValidationError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except KanbanError as e:
        error_console.print(f"[red]Storage error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@task_app.command("compact")
def task_compact(
    ctx: typer.Context,
    column_id: int = typer.Argument(..., help="Column ID"),
):
    """Renumber a column's task positions to 1..N."""
    try:
        tasks = get_services(ctx).tasks.compact_positions(column_id)
        console.print(f"[green]✓ Renumbered {len(tasks)} task(s)[/green]")

    except ValidationError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except KanbanError as e:
        error_console.print(f"[red]Storage error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
