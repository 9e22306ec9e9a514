"""Display and formatting service for worktree listings"""
from typing import List, TextIO

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gw.constants import COLUMNS, SYMBOL_CURRENT_WORKTREE, SYMBOL_MAIN_WORKTREE
from gw.models.worktree import Worktree

console = Console(stderr=True)


class DisplayService:
    def __init__(self, storage_dir: str):
        self.storage_dir = storage_dir

    def display_worktree_table(self, worktrees: List[Worktree]) -> None:
        """Display a table of worktrees on stderr."""
        table = Table()
        for col in COLUMNS:
            table.add_column(col.label)

        for wt in worktrees:
            branch = escape(wt.display_branch)
            if wt.is_main:
                branch += f" [dim]{SYMBOL_MAIN_WORKTREE}[/dim]"
            table.add_row(
                SYMBOL_CURRENT_WORKTREE if wt.is_current else "",
                branch,
                escape(wt.path),
                wt.commit_sha[:7],
                style="green" if wt.is_current else None,
            )

        console.print(table)
        managed = sum(1 for wt in worktrees if wt.path.startswith(self.storage_dir))
        console.print(f"\n{len(worktrees)} worktrees, {managed} in [dim]{escape(self.storage_dir)}[/dim]")

    @staticmethod
    def write_porcelain(worktrees: List[Worktree], out: TextIO) -> None:
        """Write one "<path><TAB><branch>" line per worktree."""
        for wt in worktrees:
            out.write(f"{wt.path}\t{wt.display_branch}\n")
