"""Command-line entry point for the ai-cli-notification hook."""

import argparse
import os
import sys
from typing import List, Optional

from rich.console import Console

from gw.logging_config import get_logger, setup_logging
from gw.notify.notifier import Notifier, build_context
from gw.notify.payload import TOOL_CLAUDE_CODE, TOOL_CODEX, TOOLS, parse_notification

console = Console(stderr=True)
logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ai-cli-notification",
        description="Notify when an AI coding assistant needs attention",
        epilog="Claude Code passes JSON on stdin, Codex passes it as an argument.",
    )
    parser.add_argument("--tool", choices=TOOLS, help="Assistant sending the notification")
    parser.add_argument("payload", nargs="?", default=None, help="JSON payload (codex)")
    parser.add_argument("--debug", action="store_true", help="Show debug information")
    return parser


def read_payload(tool: str, argument: Optional[str]) -> Optional[str]:
    """Claude Code sends JSON on stdin, Codex as the positional argument."""
    if tool == TOOL_CLAUDE_CODE:
        return sys.stdin.read()
    if tool == TOOL_CODEX:
        return argument
    return None


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the notification hook."""
    parser = build_parser()
    try:
        parsed_args = parser.parse_args(argv)
    except SystemExit as e:
        # Unknown tool or bad flags: usage already printed
        return 0 if e.code == 0 else 1

    setup_logging(debug=parsed_args.debug)

    if not parsed_args.tool:
        parser.print_usage(sys.stderr)
        return 1

    try:
        notification = parse_notification(
            parsed_args.tool, read_payload(parsed_args.tool, parsed_args.payload)
        )
        context = build_context(os.environ)
        Notifier(context).send(notification)
    except KeyboardInterrupt:
        return 1
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
