"""Shared constants for gw."""

from dataclasses import dataclass
from typing import List


@dataclass
class ColumnDefinition:
    """Definition of a table column."""

    key: str
    label: str
    width: int = 0  # 0 means auto-width


# Columns of `gw list`
COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("current", "", 1),
    ColumnDefinition("branch", "Branch", 30),
    ColumnDefinition("path", "Path"),
    ColumnDefinition("commit", "Commit", 8),
]


# Picker line layout: "<path><TAB><label>"
PICKER_DELIMITER = "\t"

# Synthetic first entry of the worktree picker
CREATE_NEW_PATH = "+"
CREATE_NEW_LABEL = "+ Create new worktree"

# Symbol constants
SYMBOL_CURRENT_WORKTREE = "*"
SYMBOL_MAIN_WORKTREE = "(main)"


# fzf exit statuses
PICKER_EXIT_OK = 0
PICKER_EXIT_NO_MATCH = 1
PICKER_EXIT_CANCELLED = 130
