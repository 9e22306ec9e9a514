"""macOS notification center delivery via osascript."""

import platform
import subprocess

from gw.logging_config import get_logger

logger = get_logger(__name__)

NOTIFICATION_SOUND = "Glass"


def _quote(text: str) -> str:
    """Escape text for an AppleScript string literal."""
    return text.replace("\\", "\\\\").replace('"', '\\"')


def build_script(title: str, message: str, subtitle: str) -> str:
    return (
        f'display notification "{_quote(message)}" with title "{_quote(title)}" '
        f'subtitle "{_quote(subtitle)}" sound name "{NOTIFICATION_SOUND}"'
    )


def send_macos_notification(title: str, message: str, subtitle: str) -> bool:
    """
    Show a notification on macOS. Does nothing on other systems.

    Returns:
        True if osascript ran successfully
    """
    if platform.system() != "Darwin":
        logger.debug("Not on macOS, skipping desktop notification")
        return False

    try:
        proc = subprocess.run(
            ["osascript", "-e", build_script(title, message, subtitle)],
            capture_output=True,
            text=True,
        )
    except OSError as e:
        logger.warning(f"Could not run osascript: {e}")
        return False
    if proc.returncode != 0:
        logger.warning(f"osascript failed: {proc.stderr.strip()}")
        return False
    return True
