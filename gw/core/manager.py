"""Core functionality for gw"""

import os
from typing import Dict, List, Optional

from rich.console import Console
from rich.markup import escape

from gw.config import Context
from gw.exceptions import GitOperationError
from gw.formatters import (
    CREATE_NEW_LINE,
    branch_name_from_ref,
    format_branch_line,
    format_worktree_line,
    is_create_new_line,
    parse_worktree_line,
    sanitize_branch_name,
)
from gw.logging_config import get_logger
from gw.models.worktree import DETACHED_HEAD, BranchScope, CommandResult, Worktree
from gw.services.git import GitRepository
from gw.services.picker import FzfPicker
from gw.services.preview import PREVIEW_BRANCH, PREVIEW_WORKTREE, preview_command
from gw.services.prompt import Prompter

# stdout is reserved for the directory the shell wrapper changes into
console = Console(stderr=True)
logger = get_logger(__name__)


class WorktreeManager:
    """Create, switch to and remove git worktrees."""

    def __init__(
        self,
        context: Context,
        repo: Optional[GitRepository] = None,
        picker: Optional[FzfPicker] = None,
        prompter: Optional[Prompter] = None,
    ):
        """Initialize WorktreeManager.

        Args:
            context: Invocation context captured at startup
            repo: Git collaborator (defaults to one for context.repo_root)
            picker: Fuzzy picker (defaults to fzf as configured)
            prompter: Yes/no prompt (defaults to the terminal)
        """
        self.context = context
        self.config = context.config
        self.repo = repo or GitRepository(context.repo_root, self.config.remote_name)
        self.picker = picker or FzfPicker(self.config.picker_command, self.config.picker_height)
        self.prompter = prompter or Prompter(console)

    @property
    def storage_dir(self) -> str:
        return self.context.storage_dir

    def target_path(self, branch_name: str) -> str:
        """Storage path of the worktree for branch_name."""
        return os.path.join(self.storage_dir, sanitize_branch_name(branch_name))

    def list(self) -> List[Worktree]:
        """All worktrees, main first, with is_current filled in."""
        worktrees = self.repo.list_worktrees()
        # The innermost matching worktree is the current one
        current = None
        for wt in worktrees:
            if self.context.is_inside(wt.path):
                if current is None or len(wt.path) > len(current.path):
                    current = wt
        for wt in worktrees:
            wt.is_current = wt is current
        return worktrees

    def _linked_worktrees(self) -> List[Worktree]:
        return [wt for wt in self.list() if not wt.is_main]

    def _main_worktree(self) -> Optional[Worktree]:
        worktrees = self.repo.list_worktrees()
        return worktrees[0] if worktrees else None

    # ------------------------------------------------------------------
    # switch
    # ------------------------------------------------------------------

    def select_and_switch(self) -> CommandResult:
        """Pick a worktree and change into it, or create a new one."""
        candidates = self._linked_worktrees()
        if not candidates:
            logger.info("No linked worktrees, going straight to branch selection")
            return self.add()

        lines = [CREATE_NEW_LINE] + [format_worktree_line(wt) for wt in candidates]
        result = self.picker.pick(
            lines,
            prompt="worktree> ",
            header="Enter: switch  |  type a new branch name to create it",
            preview=preview_command(PREVIEW_WORKTREE),
            print_query=True,
            expect=("enter",),
        )
        if result.cancelled:
            return CommandResult()

        selected = result.selected
        if selected is None:
            if result.query:
                # Typed something that matched nothing: use it as the branch
                return self.create(result.query)
            return CommandResult()

        if is_create_new_line(selected):
            return self.add(query=result.query)

        path, branch = parse_worktree_line(selected)
        logger.info(f"Switching to {path} ({branch})")
        return CommandResult(chdir=path)

    # ------------------------------------------------------------------
    # add
    # ------------------------------------------------------------------

    def add(self, branch_name: Optional[str] = None, query: str = "") -> CommandResult:
        """Create a worktree, asking for the branch when none is given."""
        if branch_name is None:
            branch_name = self.select_branch(query)
            if branch_name is None:
                console.print("[yellow]Cancelled[/yellow]")
                return CommandResult()

        branch_name = branch_name.strip()
        if not branch_name:
            console.print("[red]No branch name entered[/red]")
            return CommandResult(exit_code=1)

        return self.create(branch_name)

    def select_branch(self, query: str = "") -> Optional[str]:
        """Pick a local or remote branch, or take the typed query as a new name.

        Returns:
            Branch name ("" when nothing was picked or typed), None on cancel
        """
        remote = self.config.remote_name
        local_branches, remote_refs = self.repo.list_branches()

        choices: Dict[str, str] = {}
        for name in local_branches:
            choices[format_branch_line(name)] = name
        for ref in remote_refs:
            name = branch_name_from_ref(ref, remote)
            if name in local_branches:
                continue
            choices[format_branch_line(ref, remote)] = name

        result = self.picker.pick(
            list(choices),
            prompt="branch> ",
            header="Pick a branch, or type a new branch name",
            preview=preview_command(PREVIEW_BRANCH),
            query=query,
            print_query=True,
            expect=("enter",),
        )
        if result.cancelled:
            return None
        if result.selected is not None:
            return choices.get(result.selected, result.selected)
        return result.query

    def resolve_branch(self, branch_name: str) -> BranchScope:
        """Find branch_name locally, then on the remote."""
        for scope in (BranchScope.LOCAL, BranchScope.REMOTE):
            if self.repo.branch_exists(branch_name, scope):
                return scope
        return BranchScope.NONE

    def create(self, branch_name: str) -> CommandResult:
        """Create (or reuse) the worktree for branch_name and change into it."""
        scope = self.resolve_branch(branch_name)
        path = self.target_path(branch_name)
        logger.debug(f"Branch {branch_name} resolved as {scope.value}, target {path}")

        if os.path.exists(path):
            console.print(f"Worktree already exists: [cyan]{escape(path)}[/cyan]")
            return CommandResult(chdir=path)

        try:
            os.makedirs(self.storage_dir, exist_ok=True)
        except OSError as e:
            console.print(
                f"[red]Cannot create storage directory {escape(self.storage_dir)}: {escape(str(e))}[/red]"
            )
            return CommandResult(exit_code=1)

        remote = self.config.remote_name
        try:
            if scope == BranchScope.LOCAL:
                self.repo.create_worktree(path, branch_name)
            elif scope == BranchScope.REMOTE:
                console.print(
                    f"Creating branch [cyan]{escape(branch_name)}[/cyan] "
                    f"tracking [cyan]{escape(remote)}/{escape(branch_name)}[/cyan]"
                )
                self.repo.create_worktree(
                    path,
                    branch_name,
                    new_branch=True,
                    start_point=f"{remote}/{branch_name}",
                    track=True,
                )
            else:
                console.print(
                    f"[yellow]Branch '{escape(branch_name)}' does not exist; "
                    f"creating it from HEAD[/yellow]"
                )
                self.repo.create_worktree(path, branch_name, new_branch=True)
        except GitOperationError as e:
            console.print(f"[red]Failed to create worktree: {escape(str(e))}[/red]")
            return CommandResult(exit_code=1)

        console.print(f"[green]✓ Created worktree at {escape(path)}[/green]")
        return CommandResult(chdir=path)

    # ------------------------------------------------------------------
    # remove
    # ------------------------------------------------------------------

    def find_worktree(self, target: str) -> Optional[Worktree]:
        """Resolve a remove target: branch name, then directory name, then path."""
        worktrees = self._linked_worktrees()

        for wt in worktrees:
            if wt.branch == target:
                logger.debug(f"'{target}' matched branch of {wt.path}")
                return wt

        by_dir = os.path.realpath(self.target_path(target))
        for wt in worktrees:
            if os.path.realpath(wt.path) == by_dir:
                logger.debug(f"'{target}' matched storage directory {wt.path}")
                return wt

        by_path = os.path.realpath(os.path.join(self.context.cwd, os.path.expanduser(target)))
        for wt in worktrees:
            if os.path.realpath(wt.path) == by_path:
                logger.debug(f"'{target}' matched path {wt.path}")
                return wt

        return None

    def remove(self, target: Optional[str] = None) -> CommandResult:
        """Remove a worktree by branch, directory name or path."""
        if target is None:
            return self.remove_interactive()

        worktree = self.find_worktree(target)
        if worktree is None:
            console.print(f"[red]No worktree found for '{escape(target)}'[/red]")
            console.print("[dim]Run 'gw remove' without arguments to pick one interactively[/dim]")
            return CommandResult(exit_code=1)

        return self._remove_worktree(worktree)

    def remove_interactive(self) -> CommandResult:
        """Pick a worktree other than the main and the current one, then remove it."""
        candidates = [wt for wt in self._linked_worktrees() if not wt.is_current]
        if not candidates:
            console.print("No worktrees to remove")
            return CommandResult()

        lines = {format_worktree_line(wt): wt for wt in candidates}
        result = self.picker.pick(
            list(lines),
            prompt="remove> ",
            header="Select a worktree to remove",
            preview=preview_command(PREVIEW_WORKTREE),
        )
        if result.cancelled or result.selected is None:
            return CommandResult()

        worktree = lines.get(result.selected)
        if worktree is None:
            path, branch = parse_worktree_line(result.selected)
            worktree = Worktree(path=path, branch=branch)
        return self._remove_worktree(worktree)

    def _remove_worktree(self, worktree: Worktree) -> CommandResult:
        path = worktree.path
        branch = worktree.display_branch
        was_inside = self.context.is_inside(path)

        changes = self.repo.status(path)
        if changes:
            console.print(
                f"[yellow]⚠️  {escape(path)} has uncommitted changes:[/yellow]"
            )
            for entry in changes:
                console.print(f"   {escape(entry)}")
            if not self.prompter.confirm("Remove anyway?"):
                console.print("[yellow]Cancelled[/yellow]")
                return CommandResult()

        try:
            self.repo.remove_worktree(path, force=True)
        except GitOperationError as e:
            console.print(f"[red]Failed to remove worktree: {escape(str(e))}[/red]")
            return CommandResult(exit_code=1)
        console.print(f"[green]✓ Removed worktree at {escape(path)}[/green]")

        chdir = None
        if was_inside:
            main = self._main_worktree()
            chdir = main.path if main else self.context.repo_root

        if branch != DETACHED_HEAD and self.prompter.confirm(f"Delete branch '{escape(branch)}'?"):
            try:
                self.repo.delete_branch(branch, force=True)
                console.print(f"[green]✓ Deleted branch {escape(branch)}[/green]")
            except GitOperationError as e:
                # The worktree stays removed
                console.print(f"[red]Failed to delete branch: {escape(str(e))}[/red]")

        return CommandResult(chdir=chdir)
