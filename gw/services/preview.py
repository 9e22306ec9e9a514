"""Preview pane rendering for picker lines.

fzf runs `python -m gw _preview <kind> <line>` for the highlighted line.
Everything here is read-only, and a worktree may disappear while the
picker is open, so every git failure renders as empty output.
"""

import os
import shlex
import sys
from typing import List

from rich.markup import escape

from gw.formatters import is_create_new_line, parse_branch_line, parse_worktree_line
from gw.logging_config import get_logger
from gw.services.git import GitRepository

logger = get_logger(__name__)

PREVIEW_WORKTREE = "worktree"
PREVIEW_BRANCH = "branch"
PREVIEW_KINDS = (PREVIEW_WORKTREE, PREVIEW_BRANCH)


def preview_command(kind: str) -> str:
    """fzf --preview template that calls back into gw for the highlighted line."""
    return f"{shlex.quote(sys.executable)} -m gw _preview {kind} {{}}"


def render_worktree_preview(line: str, repo: GitRepository, log_count: int = 10) -> List[str]:
    """
    Render branch, path, status and recent commits of a worktree line.

    Args:
        line: Picker line "<path><TAB><label>"
        repo: Git collaborator
        log_count: Number of commits to show

    Returns:
        Lines with rich markup
    """
    if is_create_new_line(line):
        return [
            "[bold green]Create a new worktree[/bold green]",
            "",
            "Pick a local or remote branch, or type a new branch name.",
            "New branches start from the current HEAD.",
        ]

    path, branch = parse_worktree_line(line)
    output = [
        f"[bold]Branch:[/bold] [cyan]{escape(branch or '?')}[/cyan]",
        f"[bold]Path:[/bold]   {escape(path)}",
        "",
    ]
    if not os.path.isdir(path):
        output.append("[yellow](worktree no longer exists)[/yellow]")
        return output

    status = repo.status(path)
    output.append("[bold]Status:[/bold]")
    if status:
        output += [f"  [yellow]{escape(entry)}[/yellow]" for entry in status]
    else:
        output.append("  [green]clean[/green]")

    output += ["", "[bold]Recent commits:[/bold]"]
    output += [f"  {escape(commit)}" for commit in repo.log(path, log_count)]
    return output


def render_branch_preview(line: str, repo: GitRepository, log_count: int = 10) -> List[str]:
    """Render the recent commits of a branch picker line."""
    ref = parse_branch_line(line)
    output = [f"[bold]Branch:[/bold] [cyan]{escape(ref)}[/cyan]", ""]
    commits = repo.log(repo.repo_path, log_count, ref=ref)
    output += [escape(commit) for commit in commits]
    return output


def render_preview(kind: str, line: str, repo: GitRepository, log_count: int = 10) -> List[str]:
    """Dispatch to the renderer for kind."""
    if kind == PREVIEW_BRANCH:
        return render_branch_preview(line, repo, log_count)
    return render_worktree_preview(line, repo, log_count)
