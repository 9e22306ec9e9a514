"""Tests for GitRepository"""
import os

import pytest

from gw.exceptions import GitOperationError
from gw.models.worktree import BranchScope
from gw.services.git import GitRepository


PORCELAIN = """worktree /repo
HEAD 1111111111111111111111111111111111111111
branch refs/heads/main

worktree /repo/.git/worktrees-gw/feature-x
HEAD 2222222222222222222222222222222222222222
branch refs/heads/feature/x

worktree /repo/.git/worktrees-gw/detached
HEAD 3333333333333333333333333333333333333333
detached
"""


class TestParseWorktreeList:
    """Test parsing of `git worktree list --porcelain`."""

    def test_main_first(self):
        """Test that the main worktree is listed first."""
        worktrees = GitRepository.parse_worktree_list(PORCELAIN)

        assert [wt.path for wt in worktrees] == [
            "/repo",
            "/repo/.git/worktrees-gw/feature-x",
            "/repo/.git/worktrees-gw/detached",
        ]
        assert [wt.is_main for wt in worktrees] == [True, False, False]

    def test_branches_and_detached(self):
        """Test branch and detached HEAD entries."""
        worktrees = GitRepository.parse_worktree_list(PORCELAIN)

        assert worktrees[0].branch == "main"
        assert worktrees[1].branch == "feature/x"
        assert worktrees[2].branch is None
        assert worktrees[2].display_branch == "HEAD"
        assert worktrees[1].commit_sha.startswith("2222")

    def test_no_trailing_blank_line(self):
        """Test output without a trailing blank line."""
        worktrees = GitRepository.parse_worktree_list("worktree /repo\nHEAD abc\nbranch refs/heads/main")
        assert len(worktrees) == 1
        assert worktrees[0].branch == "main"

    def test_empty_output(self):
        """Test empty porcelain output."""
        assert GitRepository.parse_worktree_list("") == []


class TestGitRepositoryQueries:
    """Test read-only queries against a real repository."""

    def test_list_worktrees(self, git_repo):
        """Test listing worktrees of a fresh repository."""
        repo = GitRepository(git_repo.working_dir)
        worktrees = repo.list_worktrees()

        assert len(worktrees) == 1
        assert worktrees[0].is_main
        assert worktrees[0].branch == "main"
        assert os.path.realpath(worktrees[0].path) == os.path.realpath(git_repo.working_dir)

    def test_list_worktrees_outside_repository(self, temp_dir):
        """Test listing worktrees outside a repository."""
        assert GitRepository(str(temp_dir)).list_worktrees() == []

    def test_branch_exists_local(self, git_repo_with_branches):
        """Test detecting local branches."""
        repo = GitRepository(git_repo_with_branches.working_dir)
        assert repo.branch_exists("feature/x", BranchScope.LOCAL) is True
        assert repo.branch_exists("missing", BranchScope.LOCAL) is False
        assert repo.branch_exists("feature/x", BranchScope.REMOTE) is False

    def test_branch_exists_remote(self, git_repo_with_origin):
        """Test detecting remote-tracking branches."""
        repo = GitRepository(git_repo_with_origin.working_dir)
        assert repo.branch_exists("remote-only", BranchScope.REMOTE) is True
        assert repo.branch_exists("remote-only", BranchScope.LOCAL) is False

    def test_branch_exists_none_scope(self, git_repo):
        """Test that the NONE scope never matches."""
        assert GitRepository(git_repo.working_dir).branch_exists("main", BranchScope.NONE) is False

    def test_list_branches(self, git_repo_with_origin):
        """Test listing local and remote branches."""
        local, remote = GitRepository(git_repo_with_origin.working_dir).list_branches()
        assert local == ["main"]
        assert sorted(remote) == ["origin/main", "origin/remote-only"]

    def test_list_branches_with_same_named_tags(self, git_repo_with_origin):
        """Test that tags sharing a branch's name do not change the listed names."""
        git_repo_with_origin.git.tag("main")
        git_repo_with_origin.git.tag("origin/remote-only")

        local, remote = GitRepository(git_repo_with_origin.working_dir).list_branches()

        assert local == ["main"]
        assert sorted(remote) == ["origin/main", "origin/remote-only"]

    def test_status_clean_and_dirty(self, git_repo):
        """Test status of clean and modified worktrees."""
        repo = GitRepository(git_repo.working_dir)
        assert repo.status(git_repo.working_dir) == []

        with open(os.path.join(git_repo.working_dir, "README.md"), "a") as f:
            f.write("change\n")
        (status,) = repo.status(git_repo.working_dir)
        assert status.endswith("README.md")

    def test_status_missing_path(self, git_repo, temp_dir):
        """Test status of a missing path."""
        repo = GitRepository(git_repo.working_dir)
        assert repo.status(str(temp_dir / "gone")) == []

    def test_log(self, git_repo_with_branches):
        """Test recent commits for HEAD and a branch."""
        repo = GitRepository(git_repo_with_branches.working_dir)

        head_log = repo.log(git_repo_with_branches.working_dir, 5)
        assert len(head_log) == 1
        assert head_log[0].endswith("Initial commit")

        branch_log = repo.log(git_repo_with_branches.working_dir, 5, ref="feature/x")
        assert branch_log[0].endswith("Add feature")

    def test_log_unknown_ref(self, git_repo):
        """Test log of an unknown ref."""
        repo = GitRepository(git_repo.working_dir)
        assert repo.log(git_repo.working_dir, 5, ref="no-such-branch") == []


class TestGitRepositoryMutations:
    """Test worktree and branch mutations."""

    def test_create_and_remove_worktree(self, git_repo_with_branches, temp_dir):
        """Test adding and removing a worktree."""
        repo = GitRepository(git_repo_with_branches.working_dir)
        path = str(temp_dir / "wt-alpha")

        repo.create_worktree(path, "alpha")
        assert os.path.isdir(path)
        assert any(wt.branch == "alpha" for wt in repo.list_worktrees())

        repo.remove_worktree(path, force=True)
        assert not os.path.exists(path)

    def test_create_new_branch_from_start_point(self, git_repo_with_branches, temp_dir):
        """Test creating a new branch from a start point."""
        repo = GitRepository(git_repo_with_branches.working_dir)
        path = str(temp_dir / "wt-new")

        repo.create_worktree(path, "new-branch", new_branch=True, start_point="feature/x")

        assert (
            git_repo_with_branches.heads["new-branch"].commit
            == git_repo_with_branches.heads["feature/x"].commit
        )

    def test_create_worktree_failure(self, git_repo, temp_dir):
        """Test handling of a failed worktree add."""
        repo = GitRepository(git_repo.working_dir)
        with pytest.raises(GitOperationError, match="worktree add"):
            repo.create_worktree(str(temp_dir / "wt"), "no-such-branch")

    def test_remove_unknown_worktree(self, git_repo, temp_dir):
        """Test removing a worktree git does not know."""
        repo = GitRepository(git_repo.working_dir)
        with pytest.raises(GitOperationError) as excinfo:
            repo.remove_worktree(str(temp_dir / "not-a-worktree"), force=True)
        assert excinfo.value.operation == "worktree remove"

    def test_remove_dirty_worktree_needs_force(self, git_repo_with_branches, temp_dir):
        """Test that a dirty worktree needs force to remove."""
        repo = GitRepository(git_repo_with_branches.working_dir)
        path = str(temp_dir / "wt-dirty")
        repo.create_worktree(path, "alpha")
        with open(os.path.join(path, "wip.txt"), "w") as f:
            f.write("wip\n")

        with pytest.raises(GitOperationError):
            repo.remove_worktree(path)
        repo.remove_worktree(path, force=True)
        assert not os.path.exists(path)

    def test_delete_branch(self, git_repo_with_branches):
        """Test deleting a branch."""
        repo = GitRepository(git_repo_with_branches.working_dir)
        repo.delete_branch("feature/x", force=True)
        assert "feature/x" not in [head.name for head in git_repo_with_branches.heads]

    def test_delete_current_branch_fails(self, git_repo):
        """Test deleting the checked-out branch."""
        repo = GitRepository(git_repo.working_dir)
        with pytest.raises(GitOperationError, match="branch delete"):
            repo.delete_branch("main", force=True)
