"""Turn assistant hook payloads into notifications."""

import json
from typing import Any, Dict, Optional

from gw.logging_config import get_logger
from gw.notify.models import Notification

logger = get_logger(__name__)

TOOL_CLAUDE_CODE = "claude-code"
TOOL_CODEX = "codex"
TOOL_IDLE = "idle"
TOOLS = (TOOL_CLAUDE_CODE, TOOL_CODEX, TOOL_IDLE)

CLAUDE_CODE_TITLES = {
    "permission_prompt": "Claude Code - Permission Required",
    "task_completed": "Claude Code - Task Completed",
}
CLAUDE_CODE_DEFAULT_TITLE = "Claude Code"
CLAUDE_CODE_DEFAULT_MESSAGE = "Session is waiting for input"

CODEX_TITLE = "Codex CLI"
CODEX_DEFAULT_MESSAGE = "Codex task completed"

IDLE_TITLE = "Claude Code Idle"
IDLE_MESSAGE = "Session is waiting for input"
IDLE_STATUS_TEXT = "Claude Code is idle - waiting for input"


def _load(raw: Optional[str]) -> Dict[str, Any]:
    """Parse a JSON object, falling back to {} for anything else."""
    if not raw or not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning(f"Ignoring malformed notification payload: {e}")
        return {}
    return data if isinstance(data, dict) else {}


def _text(data: Dict[str, Any], key: str, default: str) -> str:
    value = data.get(key)
    if value is None or value is False:
        return default
    return str(value)


def parse_notification(tool: str, raw: Optional[str] = None) -> Notification:
    """
    Build the notification for a tool's hook payload.

    Args:
        tool: One of TOOLS
        raw: JSON payload (ignored for the idle hook)

    Returns:
        Notification with title and message

    Raises:
        ValueError: If tool is unknown
    """
    if tool == TOOL_CLAUDE_CODE:
        data = _load(raw)
        notification_type = _text(data, "notification_type", "unknown")
        return Notification(
            title=CLAUDE_CODE_TITLES.get(notification_type, CLAUDE_CODE_DEFAULT_TITLE),
            message=_text(data, "message", CLAUDE_CODE_DEFAULT_MESSAGE),
        )
    if tool == TOOL_CODEX:
        data = _load(raw)
        return Notification(
            title=CODEX_TITLE,
            message=_text(data, "last-assistant-message", CODEX_DEFAULT_MESSAGE),
        )
    if tool == TOOL_IDLE:
        return Notification(title=IDLE_TITLE, message=IDLE_MESSAGE, status_text=IDLE_STATUS_TEXT)
    raise ValueError(f"Unknown tool: {tool}")
