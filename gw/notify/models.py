"""Notification data models."""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class Notification:
    """A notification to deliver."""

    title: str
    message: str
    status_text: Optional[str] = None  # tmux status line text, defaults to "<title>: <message>"

    @property
    def status_line(self) -> str:
        return self.status_text or f"{self.title}: {self.message}"


@dataclass(frozen=True)
class NotificationContext:
    """Where the assistant is running, captured once per hook call."""

    cwd: str
    in_tmux: bool = False
    tmux_pane: Optional[str] = None
    tmux_session: str = ""
    tmux_window: str = ""

    @property
    def dir_name(self) -> str:
        return os.path.basename(self.cwd.rstrip(os.sep)) or self.cwd

    @property
    def subtitle(self) -> str:
        """macOS notification subtitle: tmux location inside tmux, else the cwd."""
        if self.tmux_session:
            return f"tmux: {self.tmux_session}/{self.tmux_window} • {self.dir_name}"
        return self.cwd
