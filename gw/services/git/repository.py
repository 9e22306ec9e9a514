"""Git collaborator for gw: worktrees, branches, status and history."""

import os
from typing import Any, Dict, List, Optional, Tuple

import git

from gw.exceptions import GitOperationError
from gw.logging_config import get_logger
from gw.models.worktree import BranchScope, Worktree

logger = get_logger(__name__)


def _command_error_message(e: git.exc.GitCommandError) -> str:
    """Extract a readable message from a GitCommandError."""
    stderr = (e.stderr if hasattr(e, "stderr") else str(e)) or ""
    stderr = stderr.strip()
    # GitPython wraps stderr as "\n  stderr: '...'" in some versions
    if stderr.startswith("stderr:"):
        stderr = stderr[len("stderr:"):].strip()
    stderr = stderr.strip("'").strip()
    status = e.status if hasattr(e, "status") else "unknown"
    if stderr:
        return f"exit {status}: {stderr}"
    return f"exit code {status}"


class GitRepository:
    """Thin wrapper over the git commands gw needs.

    Read-only queries never raise for git failures: they log and return an
    empty result. Mutating operations raise GitOperationError.
    """

    def __init__(self, repo_path: str, remote_name: str = "origin"):
        """Initialize the service.

        Args:
            repo_path: Path to the main worktree of the repository
            remote_name: Remote consulted for remote-tracking branches
        """
        self.repo_path = repo_path
        self.remote_name = remote_name

    def _get_repo(self) -> git.Repo:
        """Get a fresh git.Repo instance."""
        return git.Repo(self.repo_path)

    def list_worktrees(self) -> List[Worktree]:
        """List all worktrees, main worktree first.

        Returns:
            List of Worktree objects, or an empty list if git fails
        """
        try:
            output = self._get_repo().git.worktree("list", "--porcelain")
        except (git.exc.GitError, OSError) as e:
            logger.debug(f"Could not list worktrees: {e}")
            return []

        worktrees = self.parse_worktree_list(output)
        logger.debug(f"Found {len(worktrees)} worktrees")
        for wt in worktrees:
            logger.debug(f"  {wt}")
        return worktrees

    @staticmethod
    def parse_worktree_list(output: str) -> List[Worktree]:
        """Parse `git worktree list --porcelain` output.

        Format, one block per worktree separated by blank lines:
            worktree /path/to/worktree
            HEAD commit_sha
            branch refs/heads/branch-name   (or "detached")
        """
        worktrees: List[Worktree] = []
        entry: Dict[str, Any] = {}

        def flush():
            if entry.get("path"):
                worktrees.append(
                    Worktree(
                        path=entry["path"],
                        branch=entry.get("branch"),
                        is_main=not worktrees,  # First worktree is always the main one
                        commit_sha=entry.get("HEAD", ""),
                    )
                )
            entry.clear()

        for line in output.splitlines():
            line = line.strip()
            if not line:
                flush()
                continue

            if line.startswith("worktree "):
                flush()
                entry["path"] = line.split(" ", 1)[1]
            elif line.startswith("HEAD "):
                entry["HEAD"] = line.split(" ", 1)[1]
            elif line.startswith("branch "):
                ref = line.split(" ", 1)[1]
                if ref.startswith("refs/heads/"):
                    entry["branch"] = ref[len("refs/heads/"):]
            elif line == "detached":
                entry["branch"] = None

        flush()
        return worktrees

    def branch_exists(self, branch: str, scope: BranchScope) -> bool:
        """Check whether branch exists in the local or remote-tracking namespace."""
        if scope == BranchScope.LOCAL:
            ref = f"refs/heads/{branch}"
        elif scope == BranchScope.REMOTE:
            ref = f"refs/remotes/{self.remote_name}/{branch}"
        else:
            return False

        try:
            self._get_repo().git.show_ref("--verify", "--quiet", ref)
            return True
        except git.exc.GitCommandError:
            return False
        except (git.exc.GitError, OSError) as e:
            logger.debug(f"Error checking {ref}: {e}")
            return False

    def list_branches(self) -> Tuple[List[str], List[str]]:
        """List local branches and remote-tracking branches of the remote.

        Returns:
            Tuple of (local branch names, remote names like "origin/feature")
        """
        try:
            repo = self._get_repo()
            local = repo.git.for_each_ref("--format=%(refname:lstrip=2)", "refs/heads")
            remote = repo.git.for_each_ref(
                "--format=%(refname:lstrip=2)", f"refs/remotes/{self.remote_name}"
            )
        except (git.exc.GitError, OSError) as e:
            logger.debug(f"Could not list branches: {e}")
            return [], []

        local_branches = [name for name in local.splitlines() if name]
        prefix = f"{self.remote_name}/"
        remote_branches = [
            name for name in remote.splitlines()
            if name.startswith(prefix) and name != f"{prefix}HEAD"
        ]
        return local_branches, remote_branches

    def create_worktree(
        self,
        path: str,
        branch: str,
        new_branch: bool = False,
        start_point: Optional[str] = None,
        track: bool = False,
    ) -> None:
        """Create a worktree at path.

        Args:
            path: Directory for the new worktree
            branch: Branch to check out (or to create when new_branch is set)
            new_branch: Create branch with -b
            start_point: Commit-ish the new branch starts from (default HEAD)
            track: Set up upstream tracking for start_point

        Raises:
            GitOperationError: If git refuses to create the worktree
        """
        args = ["add"]
        if track:
            args.append("--track")
        if new_branch:
            args += ["-b", branch, path]
            if start_point:
                args.append(start_point)
        else:
            args += [path, branch]

        try:
            self._get_repo().git.worktree(*args)
        except git.exc.GitCommandError as e:
            error_msg = _command_error_message(e)
            logger.error(f"Failed to create worktree at {path}: {error_msg}")
            raise GitOperationError("worktree add", branch, error_msg)
        logger.info(f"Created worktree at {path} for branch {branch}")

    def remove_worktree(self, path: str, force: bool = False) -> None:
        """Remove the worktree at path.

        Raises:
            GitOperationError: If git fails to remove the worktree
        """
        args = ["remove", path]
        if force:
            args.append("--force")

        try:
            self._get_repo().git.worktree(*args)
        except git.exc.GitCommandError as e:
            error_msg = _command_error_message(e)
            logger.error(f"Failed to remove worktree at {path}: {error_msg}")
            raise GitOperationError("worktree remove", path, error_msg)
        logger.info(f"Removed worktree at {path}")

    def delete_branch(self, branch: str, force: bool = False) -> None:
        """Delete a local branch.

        Raises:
            GitOperationError: If git refuses to delete the branch
        """
        try:
            self._get_repo().git.branch("-D" if force else "-d", branch)
        except git.exc.GitCommandError as e:
            error_msg = _command_error_message(e)
            logger.error(f"Failed to delete branch {branch}: {error_msg}")
            raise GitOperationError("branch delete", branch, error_msg)
        logger.info(f"Deleted branch {branch}")

    def status(self, path: str) -> List[str]:
        """Return `git status --porcelain` lines for the worktree at path.

        An empty list means clean, or that the status could not be read.
        """
        if not os.path.isdir(path):
            logger.debug(f"Worktree path {path} doesn't exist")
            return []
        try:
            output = git.Git(path).status("--porcelain")
        except (git.exc.GitError, OSError) as e:
            logger.warning(f"Could not check worktree status for {path}: {e}")
            return []
        return [line for line in output.splitlines() if line.strip()]

    def log(self, path: str, count: int = 10, ref: Optional[str] = None) -> List[str]:
        """Return the last count commits as one-line summaries.

        Args:
            path: Directory to run git in (a worktree or the repository)
            count: Number of commits
            ref: Revision to start from (default HEAD of path)
        """
        if not os.path.isdir(path):
            return []
        args = [f"-n{count}", "--oneline", "--no-color"]
        if ref:
            args += [ref, "--"]
        try:
            output = git.Git(path).log(*args)
        except (git.exc.GitError, OSError) as e:
            logger.debug(f"Could not read log for {ref or path}: {e}")
            return []
        return [line for line in output.splitlines() if line]
