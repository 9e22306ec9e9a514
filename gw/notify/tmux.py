"""tmux client used by the notifier."""

import subprocess
from typing import Optional

from gw.logging_config import get_logger

logger = get_logger(__name__)

BELL_MARKER = "🔔"

# Strips the marker from the window name once, then removes itself
FOCUS_HOOK_COMMAND = (
    "run-shell 'name=$(tmux display-message -p \"#W\"); "
    f"case \"$name\" in {BELL_MARKER}*) tmux rename-window \"${{name#{BELL_MARKER}}}\";; esac'; "
    "set-hook -uw pane-focus-in"
)


class TmuxClient:
    """Runs tmux commands. Failures are logged and reported as None/False."""

    def __init__(self, executable: str = "tmux"):
        self.executable = executable

    def _run(self, *args: str) -> Optional[str]:
        command = [self.executable, *args]
        try:
            proc = subprocess.run(command, capture_output=True, text=True)
        except OSError as e:
            logger.debug(f"Could not run {command}: {e}")
            return None
        if proc.returncode != 0:
            logger.debug(f"{command} exited with {proc.returncode}: {proc.stderr.strip()}")
            return None
        return proc.stdout.rstrip("\n")

    def query(self, fmt: str, target: Optional[str] = None) -> Optional[str]:
        """Expand a tmux format, e.g. '#S' for the session name."""
        args = ["display-message"]
        if target:
            args += ["-t", target]
        return self._run(*args, "-p", fmt)

    def active_window_index(self) -> Optional[str]:
        """Index of the window the user is looking at in this session."""
        output = self._run("list-windows", "-F", "#{window_index}:#{window_active}")
        if output is None:
            return None
        for line in output.splitlines():
            index, _, active = line.partition(":")
            if active == "1":
                return index
        return None

    def set_monitor_bell(self, window: str) -> bool:
        return self._run("set-window-option", "-t", window, "monitor-bell", "on") is not None

    def display_message(self, text: str) -> bool:
        return self._run("display-message", text) is not None

    def rename_window(self, window: str, name: str) -> bool:
        return self._run("rename-window", "-t", window, name) is not None

    def unset_focus_hook(self, window: str) -> bool:
        return self._run("set-hook", "-uw", "-t", window, "pane-focus-in") is not None

    def set_focus_hook(self, window: str, command: str = FOCUS_HOOK_COMMAND) -> bool:
        return self._run("set-hook", "-w", "-t", window, "pane-focus-in", command) is not None
