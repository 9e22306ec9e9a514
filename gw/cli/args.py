"""Command-line argument parsing for gw."""

import argparse
from typing import List, Optional

from gw.__version__ import __version__

COMMANDS = {
    "switch": "Pick a worktree and change into it (default)",
    "add": "Create a worktree for a branch: gw add [branch]",
    "remove": "Remove a worktree by branch, directory name or path: gw remove [target]",
    "list": "List worktrees",
    "shell-init": "Print the shell function that lets gw change directory",
}

# Alternate spellings accepted on the command line
ALIASES = {
    "rm": "remove",
    "ls": "list",
    "sw": "switch",
}

# Maximum number of positional arguments each command takes
MAX_ARGS = {
    "switch": 0,
    "add": 1,
    "remove": 1,
    "list": 0,
    "shell-init": 1,
    "_preview": 2,
}


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    epilog = "commands:\n" + "\n".join(f"  {name:<12}{help_text}" for name, help_text in COMMANDS.items())
    epilog += "\n\nSetup: add 'eval \"$(gw shell-init)\"' to your shell rc file so gw can change directory."
    parser = argparse.ArgumentParser(
        prog="gw",
        description="Interactive git worktree manager",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("command", nargs="?", default="switch", help=argparse.SUPPRESS)
    parser.add_argument("args", nargs="*", help=argparse.SUPPRESS)
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument("--debug", action="store_true", help="Show debug information and log to ~/.gw/gw.log")
    parser.add_argument("--porcelain", action="store_true", help="Machine-readable output for 'list'")
    parser.add_argument("--version", action="version", version=f"gw {__version__}")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments and normalize the command name."""
    parsed = build_parser().parse_args(argv)
    parsed.command = ALIASES.get(parsed.command, parsed.command)
    return parsed


def is_valid_command(parsed: argparse.Namespace) -> bool:
    """Check the command is known and got an acceptable number of arguments."""
    if parsed.command not in MAX_ARGS:
        return False
    return len(parsed.args) <= MAX_ARGS[parsed.command]
