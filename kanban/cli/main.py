"""
FILE: kanban/cli/main.py
PURPOSE: Typer-based CLI for board, column, task, and tag management
EXPORTS:
  - app (Typer application)
  - board_app, column_app, task_app, tag_app (command groups)
  - get_services(ctx) -> Services
  - print_json(text) -> None
  - main() (entry point)
DEPENDENCIES:
  - typer (CLI framework)
  - rich (formatted output)
  - kanban.config (load_config)
  - kanban.core.context (open_services)
NOTES:
  - --db and --log-level apply to every command (or KANBAN_DB / KANBAN_LOG_LEVEL)
  - The store is opened on first use and closed when the command finishes
  - Error messages go to stderr
  - Exit codes: 0=success, 1=error
  - Calls service layer only
"""

import logging
from dataclasses import dataclass
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from .. import __version__
from ..config import Config, load_config
from ..core.context import Services, open_services
from ..core.exceptions import ValidationError

# Typer app setup
app = typer.Typer(
    name="kanban",
    help="Kanban boards in the terminal",
    add_completion=False,
    no_args_is_help=True,
)

# Sub-command groups
board_app = typer.Typer(name="board", help="Board management commands", no_args_is_help=True)
column_app = typer.Typer(name="column", help="Column management commands", no_args_is_help=True)
task_app = typer.Typer(name="task", help="Task management commands", no_args_is_help=True)
tag_app = typer.Typer(name="tag", help="Tag management commands", no_args_is_help=True)
app.add_typer(board_app, name="board")
app.add_typer(column_app, name="column")
app.add_typer(task_app, name="task")
app.add_typer(tag_app, name="tag")

# Rich console for formatted output
console = Console()
error_console = Console(stderr=True)


@dataclass
class CliState:
    """Per-invocation state stored on the root context."""

    config: Config
    services: Optional[Services] = None


@app.callback()
def root(
    ctx: typer.Context,
    db_path: Optional[str] = typer.Option(None, "--db", help="Database file (default: ~/.kanban/kanban.db)"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level (default: WARNING)"),
):
    """Kanban boards in the terminal."""
    try:
        config = load_config(db_path=db_path, log_level=log_level)
    except ValidationError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = CliState(config=config)


def get_services(ctx: typer.Context) -> Services:
    """Open the store on first use; it is closed when the root context closes."""
    root_ctx = ctx.find_root()
    state: CliState = root_ctx.obj
    if state.services is None:
        state.services = open_services(state.config)
        root_ctx.call_on_close(state.services.close)
    return state.services


def print_json(text: str) -> None:
    """Print JSON verbatim (no markup, highlighting, or wrapping)."""
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def confirm_or_abort(message: str, yes: bool) -> None:
    if not yes:
        typer.confirm(message, abort=True)


# Import command modules to register commands with the groups above
from .commands import (  # noqa: E402
    # System commands
    version,
    # Board commands
    board_add,
    board_ls,
    board_show,
    board_rename,
    board_rm,
    # Column commands
    column_add,
    column_ls,
    column_rename,
    column_color,
    column_rm,
    column_compact,
    # Task commands
    task_add,
    task_ls,
    task_show,
    task_edit,
    task_mv,
    task_rm,
    task_priority,
    task_due,
    task_tag,
    task_untag,
    task_compact,
    # Tag commands
    tag_add,
    tag_ls,
    tag_rm,
)


def main():
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
