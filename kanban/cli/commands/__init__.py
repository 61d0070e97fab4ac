"""
FILE: kanban/cli/commands/__init__.py
PURPOSE: CLI command modules
"""

# Export all command handlers for easy importing
from .boards import (
    board_add,
    board_ls,
    board_show,
    board_rename,
    board_rm,
)
from .columns import (
    column_add,
    column_ls,
    column_rename,
    column_color,
    column_rm,
    column_compact,
)
from .tasks import (
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
)
from .tags import (
    tag_add,
    tag_ls,
    tag_rm,
)
from .system import (
    version,
)

__all__ = [
    "board_add",
    "board_ls",
    "board_show",
    "board_rename",
    "board_rm",
    "column_add",
    "column_ls",
    "column_rename",
    "column_color",
    "column_rm",
    "column_compact",
    "task_add",
    "task_ls",
    "task_show",
    "task_edit",
    "task_mv",
    "task_rm",
    "task_priority",
    "task_due",
    "task_tag",
    "task_untag",
    "task_compact",
    "tag_add",
    "tag_ls",
    "tag_rm",
    "version",
]
