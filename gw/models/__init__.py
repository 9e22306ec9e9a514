"""Data models for gw."""

from .worktree import Worktree, BranchScope, CommandResult, DETACHED_HEAD

__all__ = ["Worktree", "BranchScope", "CommandResult", "DETACHED_HEAD"]
