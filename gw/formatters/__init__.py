"""Formatting utilities for gw.

The picker speaks flat text; these helpers are the only place where
Worktree records and branch refs are turned into picker lines and back.
"""

from .worktree import (
    sanitize_branch_name,
    format_worktree_line,
    parse_worktree_line,
    format_branch_line,
    parse_branch_line,
    branch_name_from_ref,
    is_create_new_line,
    CREATE_NEW_LINE,
)

__all__ = [
    "sanitize_branch_name",
    "format_worktree_line",
    "parse_worktree_line",
    "format_branch_line",
    "parse_branch_line",
    "branch_name_from_ref",
    "is_create_new_line",
    "CREATE_NEW_LINE",
]
