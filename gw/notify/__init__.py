"""Desktop and tmux notifications for AI coding assistants.

Installed as the ``ai-cli-notification`` hook: Claude Code pipes a JSON
payload on stdin, Codex passes it as an argument, and the idle hook
passes nothing.
"""

from .models import Notification, NotificationContext
from .payload import parse_notification, TOOLS
from .notifier import Notifier

__all__ = ["Notification", "NotificationContext", "parse_notification", "TOOLS", "Notifier"]
