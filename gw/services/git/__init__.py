"""Git-related services for gw."""

from .repository import GitRepository

__all__ = ["GitRepository"]
