"""Picker line formatting for worktrees and branches."""

import re
from typing import Optional, Tuple

from gw.constants import (
    CREATE_NEW_LABEL,
    CREATE_NEW_PATH,
    PICKER_DELIMITER,
    SYMBOL_CURRENT_WORKTREE,
)
from gw.models.worktree import Worktree

CREATE_NEW_LINE = f"{CREATE_NEW_PATH}{PICKER_DELIMITER}{CREATE_NEW_LABEL}"

_BRACKETED_BRANCH = re.compile(r"\[([^\[\]]+)\]\s*$")


def sanitize_branch_name(branch: str) -> str:
    """
    Turn a branch name into a storage directory name.

    Every "/" becomes "-". Distinct branches such as "a/b" and "a-b"
    map to the same directory; no attempt is made to tell them apart.

    Args:
        branch: Branch name

    Returns:
        Directory name
    """
    return branch.replace("/", "-")


def format_worktree_line(worktree: Worktree) -> str:
    """
    Format a worktree as a picker line.

    Example:
        "/repo/.git/worktrees-gw/feature-x\\t* feature-x [feature/x]"
    """
    marker = SYMBOL_CURRENT_WORKTREE if worktree.is_current else " "
    label = f"{marker} {worktree.name} [{worktree.display_branch}]"
    return f"{worktree.path}{PICKER_DELIMITER}{label}"


def parse_worktree_line(line: str) -> Tuple[str, Optional[str]]:
    """
    Recover path and branch from a picker line.

    Args:
        line: Line as printed by the picker

    Returns:
        Tuple of (path, branch). branch is None when the label carries none.
    """
    line = line.rstrip("\n")
    if PICKER_DELIMITER not in line:
        return line.strip(), None

    path, label = line.split(PICKER_DELIMITER, 1)
    match = _BRACKETED_BRANCH.search(label)
    return path, match.group(1) if match else None


def is_create_new_line(line: str) -> bool:
    """Return True for the synthetic "create new worktree" entry."""
    path, _ = parse_worktree_line(line)
    return path == CREATE_NEW_PATH


def format_branch_line(ref: str, remote_name: Optional[str] = None) -> str:
    """
    Format a branch ref as a picker line.

    Args:
        ref: Local branch ("feature/x") or remote-tracking ref ("origin/feature/x")
        remote_name: Set when ref is a remote-tracking ref

    Returns:
        "<ref><TAB><label>"; remote entries are labelled with their remote
    """
    if remote_name:
        name = branch_name_from_ref(ref, remote_name)
        label = f"{name} ({remote_name})"
    else:
        label = ref
    return f"{ref}{PICKER_DELIMITER}{label}"


def parse_branch_line(line: str) -> str:
    """Recover the ref from a branch picker line."""
    return line.rstrip("\n").split(PICKER_DELIMITER, 1)[0].strip()


def branch_name_from_ref(ref: str, remote_name: str) -> str:
    """Strip the "<remote>/" prefix from a remote-tracking ref."""
    prefix = f"{remote_name}/"
    if ref.startswith(prefix):
        return ref[len(prefix):]
    return ref
