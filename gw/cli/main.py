"""Command-line interface for gw"""

import os
import sys
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from gw.cli.args import build_parser, is_valid_command, parse_args
from gw.cli.shell import shell_init
from gw.config import Config, Context
from gw.core import WorktreeManager
from gw.exceptions import GwError, NotAGitRepositoryError
from gw.logging_config import get_logger, setup_logging
from gw.models.worktree import CommandResult
from gw.services.display_service import DisplayService
from gw.services.git import GitRepository
from gw.services.preview import PREVIEW_KINDS, render_preview

console = Console(stderr=True)
logger = get_logger(__name__)


def run_preview(context: Context, args: List[str]) -> int:
    """Render the picker preview pane. Never fails."""
    kind, line = (args + ["", ""])[:2]
    if kind not in PREVIEW_KINDS:
        return 0
    preview_console = Console(force_terminal=True, highlight=False)
    try:
        repo = GitRepository(context.repo_root, context.config.remote_name)
        for text in render_preview(kind, line, repo, context.config.log_count):
            preview_console.print(text)
    except Exception as e:
        # The worktree may be removed while the picker is open
        logger.debug(f"Preview failed for {line!r}: {e}")
    return 0


def dispatch(manager: WorktreeManager, command: str, args: List[str], porcelain: bool = False) -> CommandResult:
    """Run a command against the manager."""
    target = args[0] if args else None
    if command == "add":
        return manager.add(target)
    if command == "remove":
        return manager.remove(target)
    if command == "list":
        worktrees = manager.list()
        display = DisplayService(manager.storage_dir)
        if porcelain:
            display.write_porcelain(worktrees, sys.stdout)
        else:
            display.display_worktree_table(worktrees)
        return CommandResult()
    return manager.select_and_switch()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    parsed_args = parse_args(argv)
    setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

    if not is_valid_command(parsed_args):
        build_parser().print_usage(sys.stderr)
        console.print(f"[red]Unknown command or arguments: {escape(' '.join([parsed_args.command] + parsed_args.args))}[/red]")
        return 1

    if parsed_args.command == "shell-init":
        shell = parsed_args.args[0] if parsed_args.args else os.path.basename(os.environ.get("SHELL", "bash"))
        try:
            sys.stdout.write(shell_init(shell))
        except ValueError as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            return 1
        return 0

    try:
        config = Config.from_env(os.environ, verbose=parsed_args.verbose, debug=parsed_args.debug)
        context = Context.discover(os.getcwd(), os.environ, config)

        if parsed_args.command == "_preview":
            return run_preview(context, parsed_args.args)

        if parsed_args.debug:
            console.print("[yellow]Debug mode enabled[/yellow]")
            console.print("[yellow]Configuration:[/yellow]")
            for key, value in config.to_dict().items():
                console.print(f"  {key}: {value}")
            console.print(f"  storage_dir: {context.storage_dir}")

        manager = WorktreeManager(context)
        result = dispatch(manager, parsed_args.command, parsed_args.args, parsed_args.porcelain)
    except NotAGitRepositoryError:
        console.print("[red]Error: not a git repository[/red]")
        return 1
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except (GwError, ValueError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        if parsed_args.debug:
            console.print_exception()
        return 1

    if result.chdir:
        print(result.chdir)
    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
