"""Core worktree management for gw."""

from .manager import WorktreeManager

__all__ = ["WorktreeManager"]
