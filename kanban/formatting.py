"""
FILE: kanban/formatting.py
PURPOSE: Shared formatting utilities for CLI output
EXPORTS:
  - BoardFormatter: Tables for boards and a board's column layout
  - TaskFormatter: Tables and detail panels for tasks
  - TagFormatter: Table for tags
  - priority_markup(priority) -> str
DEPENDENCIES:
  - rich (for table formatting)
  - kanban.core.models
NOTES:
  - Centralized formatting logic so command modules stay thin
  - Column/tag colors come straight from the stored #RRGGBB values
  - User text is escaped before it is embedded in rich markup
"""

from typing import Dict, List, Optional

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .core.models import Board, Priority, Tag, Task

PRIORITY_STYLES = {
    Priority.LOW: "dim",
    Priority.MEDIUM: "yellow",
    Priority.HIGH: "bold red",
}


def priority_markup(priority: Optional[Priority]) -> str:
    if priority is None:
        return "[dim]-[/dim]"
    style = PRIORITY_STYLES[priority]
    return f"[{style}]{priority.value}[/{style}]"


def _tag_markup(tag: Tag) -> str:
    return f"[{tag.color}]{escape(tag.name)}[/{tag.color}]"


def _date_only(timestamp: Optional[str]) -> str:
    return timestamp.split("T")[0] if timestamp else ""


class BoardFormatter:
    """Board display formatting."""

    @staticmethod
    def create_table(boards: List[Board], title: str = "Boards") -> Table:
        table = Table(title=title, show_header=True, header_style="bold cyan")
        table.add_column("ID", style="cyan", width=6, no_wrap=True)
        table.add_column("Name", style="white")
        table.add_column("Created", style="dim")

        for board in boards:
            table.add_row(str(board.id), escape(board.name), _date_only(board.created_at))

        return table

    @staticmethod
    def create_layout(board: Board, tasks_by_column: Dict[int, List[Task]]) -> Table:
        """
        Render a board as side-by-side columns, one task per line.

        Args:
            board: Board with columns attached
            tasks_by_column: Column ID -> tasks ordered by position
        """
        table = Table(title=f"{escape(board.name)} (#{board.id})", show_lines=False, expand=True)

        for column in board.columns:
            table.add_column(
                f"{escape(column.name)} [dim]#{column.id}[/dim]",
                header_style=f"bold {column.color}",
                overflow="fold",
            )

        columns_text = []
        for column in board.columns:
            lines = Text()
            for task in tasks_by_column.get(column.id, []):
                lines.append(f"#{task.id} ", style="cyan")
                lines.append(f"{task.title}\n")
            columns_text.append(lines)

        if columns_text:
            table.add_row(*columns_text)

        return table


class TaskFormatter:
    """Task display formatting."""

    @staticmethod
    def create_table(tasks: List[Task], title: str = "Tasks") -> Table:
        table = Table(title=title, show_header=True, header_style="bold cyan")
        table.add_column("ID", style="cyan", width=6, no_wrap=True)
        table.add_column("Pos", style="dim", width=4)
        table.add_column("Title", style="white")
        table.add_column("Priority", width=8)
        table.add_column("Due", style="magenta")

        for task in tasks:
            table.add_row(
                str(task.id),
                str(task.position),
                escape(task.title),
                priority_markup(task.priority),
                task.due_date or "",
            )

        return table

    @staticmethod
    def create_panel(task: Task, column_name: Optional[str] = None) -> Panel:
        """Full task details (description, tags, dates)."""
        lines = [
            f"[bold]Column:[/bold] {escape(column_name or str(task.column_id))}",
            f"[bold]Position:[/bold] {task.position}",
            f"[bold]Priority:[/bold] {priority_markup(task.priority)}",
            f"[bold]Created:[/bold] {task.created_at or ''}",
        ]
        if task.due_date:
            lines.append(f"[bold]Due:[/bold] {task.due_date}")
        if task.tags:
            tags = " ".join(_tag_markup(tag) for tag in task.tags)
            lines.append(f"[bold]Tags:[/bold] {tags}")
        if task.description:
            lines.append("")
            lines.append(escape(task.description))

        return Panel("\n".join(lines), title=f"#{task.id} {escape(task.title)}", expand=False)


class TagFormatter:
    """Tag display formatting."""

    @staticmethod
    def create_table(tags: List[Tag], title: str = "Tags") -> Table:
        table = Table(title=title, show_header=True, header_style="bold cyan")
        table.add_column("ID", style="cyan", width=6, no_wrap=True)
        table.add_column("Name")
        table.add_column("Color")

        for tag in tags:
            table.add_row(str(tag.id), _tag_markup(tag), tag.color)

        return table
