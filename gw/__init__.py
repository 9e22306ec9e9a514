"""
gw - interactive git worktree manager
"""

from .__version__ import __version__
from .core import WorktreeManager

__all__ = ["WorktreeManager", "__version__"]
