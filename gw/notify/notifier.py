"""Deliver notifications through tmux and the macOS notification center."""

import os
import sys
from typing import Callable, Mapping, Optional, TextIO

from gw.logging_config import get_logger
from gw.notify.macos import send_macos_notification
from gw.notify.models import Notification, NotificationContext
from gw.notify.tmux import BELL_MARKER, TmuxClient

logger = get_logger(__name__)


def build_context(
    environ: Mapping[str, str], cwd: Optional[str] = None, tmux: Optional[TmuxClient] = None
) -> NotificationContext:
    """Capture cwd and tmux location once."""
    cwd = cwd or environ.get("PWD") or os.getcwd()
    if not environ.get("TMUX"):
        return NotificationContext(cwd=cwd)

    tmux = tmux or TmuxClient()
    return NotificationContext(
        cwd=cwd,
        in_tmux=True,
        tmux_pane=environ.get("TMUX_PANE") or None,
        tmux_session=tmux.query("#S") or "",
        tmux_window=tmux.query("#W") or "",
    )


class Notifier:
    """Sends a notification unless the user is already looking at the assistant."""

    def __init__(
        self,
        context: NotificationContext,
        tmux: Optional[TmuxClient] = None,
        desktop: Callable[[str, str, str], bool] = send_macos_notification,
        bell_stream: TextIO = sys.stdout,
    ):
        self.context = context
        self.tmux = tmux or TmuxClient()
        self.desktop = desktop
        self.bell_stream = bell_stream

    def send_desktop(self, notification: Notification) -> bool:
        return self.desktop(notification.title, notification.message, self.context.subtitle)

    def send(self, notification: Notification) -> bool:
        """
        Deliver notification.

        Outside tmux only the desktop notification is sent. Inside tmux
        nothing happens while the assistant's window is the active one;
        otherwise the window is flagged with a bell and a marker that
        clears itself on focus.

        Returns:
            True if anything was delivered
        """
        if not self.context.in_tmux:
            self.send_desktop(notification)
            return True

        # #{window_active} is always 1 from inside the pane, so compare
        # against the session's active window instead
        current_window = self.tmux.query("#I", target=self.context.tmux_pane)
        if current_window is None:
            logger.warning("Could not determine tmux window, sending desktop notification only")
            self.send_desktop(notification)
            return True

        if current_window == self.tmux.active_window_index():
            logger.debug(f"Window {current_window} is active, not notifying")
            return False

        self.send_desktop(notification)

        self.bell_stream.write("\a")
        self.bell_stream.flush()

        self.tmux.set_monitor_bell(current_window)
        self.tmux.display_message(notification.status_line)
        self.mark_window(current_window)
        return True

    def mark_window(self, window: str) -> None:
        """Prefix the window name with the bell marker until it gets focus."""
        name = self.tmux.query("#W", target=self.context.tmux_pane) or ""
        if name.startswith(BELL_MARKER):
            name = name[len(BELL_MARKER):]
        self.tmux.unset_focus_hook(window)
        self.tmux.rename_window(window, f"{BELL_MARKER}{name}")
        self.tmux.set_focus_hook(window)
