"""Tests for configuration and context discovery"""
import os

import pytest

from gw.config import Config, Context
from gw.exceptions import NotAGitRepositoryError


class TestConfig:
    """Test Config validation."""

    def test_defaults(self):
        """Test default configuration values."""
        config = Config()
        assert config.remote_name == "origin"
        assert config.storage_dir_name == "worktrees-gw"
        assert config.picker_command == "fzf"

    @pytest.mark.parametrize("kwargs", [
        {"remote_name": " "},
        {"storage_dir_name": "a/b"},
        {"storage_dir_name": ".."},
        {"log_count": 0},
        {"picker_command": ""},
    ])
    def test_invalid_values(self, kwargs):
        """Test rejection of invalid configuration values."""
        with pytest.raises(ValueError):
            Config(**kwargs)

    def test_from_env(self):
        """Test loading configuration from GW_* variables."""
        config = Config.from_env({
            "GW_REMOTE": "upstream",
            "GW_LOG_COUNT": "3",
            "GW_PICKER": "sk",
            "GW_STORAGE_DIR_NAME": "trees",
        })
        assert config.remote_name == "upstream"
        assert config.log_count == 3
        assert config.picker_command == "sk"
        assert config.storage_dir_name == "trees"

    def test_from_env_overrides(self):
        """Test that explicit overrides win over the environment."""
        config = Config.from_env({"GW_REMOTE": "upstream"}, debug=True)
        assert config.debug is True
        assert config.remote_name == "upstream"

    def test_from_env_bad_integer(self):
        """Test a non-numeric GW_LOG_COUNT."""
        with pytest.raises(ValueError, match="GW_LOG_COUNT"):
            Config.from_env({"GW_LOG_COUNT": "many"})

    def test_to_dict(self):
        """Test configuration serialization."""
        assert Config().to_dict()["log_count"] == 10


class TestContext:
    """Test repository discovery."""

    def test_discover(self, git_repo):
        """Test discovery from the repository root."""
        context = Context.discover(git_repo.working_dir, environ={"GW_REMOTE": "upstream", "HOME": "/x"})

        assert context.repo_root == os.path.realpath(git_repo.working_dir)
        assert context.git_dir == os.path.realpath(git_repo.git_dir)
        assert context.storage_dir == os.path.join(context.git_dir, "worktrees-gw")
        assert context.env == {"GW_REMOTE": "upstream"}
        assert "HOME" not in context.env

    def test_discover_from_subdirectory(self, git_repo):
        """Test discovery from a nested directory."""
        sub = os.path.join(git_repo.working_dir, "sub")
        os.mkdir(sub)

        context = Context.discover(sub, environ={})

        assert context.repo_root == os.path.realpath(git_repo.working_dir)
        assert context.cwd == sub

    def test_custom_storage_dir_name(self, git_repo):
        """Test a custom storage directory name."""
        context = Context.discover(git_repo.working_dir, environ={}, config=Config(storage_dir_name="trees"))
        assert os.path.basename(context.storage_dir) == "trees"

    def test_not_a_repository(self, temp_dir):
        """Test discovery outside a repository."""
        with pytest.raises(NotAGitRepositoryError):
            Context.discover(str(temp_dir), environ={})

    def test_is_inside(self, git_repo):
        """Test the inside-directory check."""
        sub = os.path.join(git_repo.working_dir, "sub")
        os.mkdir(sub)
        context = Context.discover(sub, environ={})

        assert context.is_inside(git_repo.working_dir)
        assert context.is_inside(sub)
        assert not context.is_inside(git_repo.working_dir + "-other")
