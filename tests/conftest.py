"""Pytest fixtures for gw tests"""
import os
import tempfile
from pathlib import Path
from typing import List

import git
import pytest

from gw.config import Config, Context
from gw.core import WorktreeManager
from gw.services.picker import PickerResult


def commit_file(repo: git.Repo, name: str, content: str, message: str) -> None:
    """Write a file in the repo's working tree and commit it."""
    path = Path(repo.working_dir) / name
    path.write_text(content)
    repo.index.add([name])
    repo.index.commit(message)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(os.path.realpath(tmpdir))


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository with one commit on main."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    commit_file(repo, "README.md", "# Test Repository\n", "Initial commit")

    # Rename master to main if needed
    repo.git.branch("-M", "main")

    yield repo

    repo.close()


@pytest.fixture
def git_repo_with_branches(git_repo):
    """Create a Git repository with a couple of local branches."""
    repo = git_repo

    repo.git.checkout("-b", "feature/x")
    commit_file(repo, "feature.txt", "Feature content\n", "Add feature")

    repo.git.checkout("main")
    repo.git.branch("alpha")
    repo.git.branch("beta")

    yield repo


@pytest.fixture
def git_repo_with_origin(git_repo, temp_dir):
    """Create a repository whose bare origin has a branch that only exists remotely."""
    upstream_path = temp_dir / "upstream.git"
    git.Repo.init(upstream_path, bare=True).close()

    repo = git_repo
    repo.create_remote("origin", str(upstream_path))
    repo.git.push("origin", "main")

    repo.git.checkout("-b", "remote-only")
    commit_file(repo, "remote.txt", "Remote content\n", "Remote work")
    repo.git.push("origin", "remote-only")
    repo.git.checkout("main")
    repo.git.branch("-D", "remote-only")
    repo.git.fetch("origin")

    yield repo


class FakePicker:
    """Stands in for fzf: returns queued results and records every call."""

    def __init__(self, results: List[PickerResult] = None):
        self.results = list(results or [])
        self.calls = []

    def pick(self, lines, prompt=None, header=None, preview=None, query="", print_query=False, expect=()):
        self.calls.append({
            "lines": list(lines),
            "prompt": prompt,
            "preview": preview,
            "query": query,
            "print_query": print_query,
            "expect": tuple(expect),
        })
        if not self.results:
            return PickerResult(cancelled=True)
        return self.results.pop(0)


class FakePrompter:
    """Answers confirmation prompts from a list and records the questions."""

    def __init__(self, answers: List[bool] = None):
        self.answers = list(answers or [])
        self.questions = []

    def confirm(self, message: str) -> bool:
        self.questions.append(message)
        return self.answers.pop(0) if self.answers else False


@pytest.fixture
def fake_picker():
    return FakePicker()


@pytest.fixture
def fake_prompter():
    return FakePrompter()


def make_context(repo: git.Repo, cwd: str = None) -> Context:
    return Context.discover(cwd or repo.working_dir, environ={}, config=Config())


def make_manager(repo: git.Repo, picker=None, prompter=None, cwd: str = None) -> WorktreeManager:
    return WorktreeManager(
        make_context(repo, cwd),
        picker=picker or FakePicker(),
        prompter=prompter or FakePrompter(),
    )
