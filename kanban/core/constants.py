"""
FILE: kanban/core/constants.py
PURPOSE: Constants used throughout the application
EXPORTS:
  - BOARD_NAME_MAX_LENGTH, COLUMN_NAME_MAX_LENGTH, TASK_TITLE_MAX_LENGTH, TAG_NAME_MAX_LENGTH
  - DEFAULT_COLUMN_COLOR: Color for columns added without one
  - DEFAULT_COLUMNS: (name, color) pairs created with every new board
  - COLOR_PATTERN: Hex color regex (#RRGGBB)
DEPENDENCIES:
  - re (stdlib)
NOTES:
  - Single source of truth for limits and defaults
"""

import re

# Length limits
BOARD_NAME_MAX_LENGTH = 100
COLUMN_NAME_MAX_LENGTH = 50
TASK_TITLE_MAX_LENGTH = 200
TAG_NAME_MAX_LENGTH = 30

# Column defaults
DEFAULT_COLUMN_COLOR = "#808080"
DEFAULT_COLUMNS = (
    ("TODO", "#FF6B6B"),         # red
    ("IN PROGRESS", "#4ECDC4"),  # teal
    ("DONE", "#45B7D1"),         # blue
)

# Positions start at 1
FIRST_POSITION = 1

COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")
