"""Worktree data models."""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

# Branch label used for worktrees with a detached HEAD
DETACHED_HEAD = "HEAD"


class BranchScope(Enum):
    """Where a branch name resolved, in lookup order."""
    LOCAL = "local"
    REMOTE = "remote"
    NONE = "none"


@dataclass
class Worktree:
    """Information about a git worktree."""

    path: str
    branch: Optional[str]  # None for a detached HEAD
    is_main: bool = False  # First entry of `git worktree list`
    is_current: bool = False  # Invocation cwd is inside this worktree
    commit_sha: str = ""

    @property
    def display_branch(self) -> str:
        return self.branch or DETACHED_HEAD

    @property
    def name(self) -> str:
        """Directory name of the worktree."""
        return os.path.basename(self.path.rstrip(os.sep))

    def __str__(self) -> str:
        main_marker = " (main)" if self.is_main else ""
        return f"{self.display_branch} @ {self.path}{main_marker}"


@dataclass
class CommandResult:
    """Outcome of a gw command.

    chdir is the directory the calling shell should change into, if any.
    """

    exit_code: int = 0
    chdir: Optional[str] = None
