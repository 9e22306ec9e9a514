"""Configuration handling for gw"""

import os
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

import git

from gw.exceptions import NotAGitRepositoryError
from gw.logging_config import get_logger

logger = get_logger(__name__)

# Environment variables read once at startup
ENV_KEYS = (
    "GW_REMOTE",
    "GW_STORAGE_DIR_NAME",
    "GW_LOG_COUNT",
    "GW_PICKER",
    "GW_PICKER_HEIGHT",
)


@dataclass
class Config:
    """Configuration for gw with validation."""

    remote_name: str = "origin"
    storage_dir_name: str = "worktrees-gw"
    log_count: int = 10  # Commits shown in previews

    # Picker
    picker_command: str = "fzf"
    picker_height: str = "40%"

    # Output
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_remote_name()
        self._validate_storage_dir_name()
        self._validate_log_count()
        self._validate_picker_command()

    def _validate_remote_name(self):
        """Validate remote_name is not empty."""
        if not self.remote_name or not self.remote_name.strip():
            raise ValueError("remote_name cannot be empty")
        self.remote_name = self.remote_name.strip()

    def _validate_storage_dir_name(self):
        """Validate storage_dir_name is a single path component."""
        name = (self.storage_dir_name or "").strip()
        if not name or "/" in name or name in (".", ".."):
            raise ValueError(f"storage_dir_name must be a plain directory name, got '{self.storage_dir_name}'")
        self.storage_dir_name = name

    def _validate_log_count(self):
        """Validate log_count is positive."""
        if self.log_count <= 0:
            raise ValueError(f"log_count must be positive, got {self.log_count}")

    def _validate_picker_command(self):
        """Validate picker_command is not empty."""
        if not self.picker_command or not self.picker_command.strip():
            raise ValueError("picker_command cannot be empty")

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "remote_name": self.remote_name,
            "storage_dir_name": self.storage_dir_name,
            "log_count": self.log_count,
            "picker_command": self.picker_command,
            "picker_height": self.picker_height,
            "verbose": self.verbose,
            "debug": self.debug,
        }

    @classmethod
    def from_env(cls, environ: Mapping[str, str], **overrides) -> "Config":
        """Create Config from GW_* environment variables, then apply overrides."""
        values: Dict[str, object] = {}
        if environ.get("GW_REMOTE"):
            values["remote_name"] = environ["GW_REMOTE"]
        if environ.get("GW_STORAGE_DIR_NAME"):
            values["storage_dir_name"] = environ["GW_STORAGE_DIR_NAME"]
        if environ.get("GW_LOG_COUNT"):
            try:
                values["log_count"] = int(environ["GW_LOG_COUNT"])
            except ValueError:
                raise ValueError(f"GW_LOG_COUNT must be an integer, got '{environ['GW_LOG_COUNT']}'")
        if environ.get("GW_PICKER"):
            values["picker_command"] = environ["GW_PICKER"]
        if environ.get("GW_PICKER_HEIGHT"):
            values["picker_height"] = environ["GW_PICKER_HEIGHT"]

        values.update(overrides)
        return cls(**values)


@dataclass(frozen=True)
class Context:
    """Everything gw needs from the invoking shell, captured once.

    Attributes:
        cwd: Directory gw was invoked from
        repo_root: Working directory of the main worktree
        git_dir: Common git directory of the repository (shared by all worktrees)
        storage_dir: Directory holding worktrees created by gw
        config: Validated configuration
        env: Snapshot of the environment variables gw cares about
    """

    cwd: str
    repo_root: str
    git_dir: str
    storage_dir: str
    config: Config = field(default_factory=Config)
    env: Mapping[str, str] = field(default_factory=dict)

    def is_inside(self, path: str) -> bool:
        """Return True if cwd is path or a directory below it."""
        cwd = os.path.realpath(self.cwd)
        path = os.path.realpath(path)
        return cwd == path or cwd.startswith(path.rstrip(os.sep) + os.sep)

    @classmethod
    def discover(
        cls,
        cwd: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
        config: Optional[Config] = None,
    ) -> "Context":
        """Locate the repository containing cwd and build the context.

        Raises:
            NotAGitRepositoryError: If cwd is not inside a git repository
        """
        cwd = cwd or os.getcwd()
        environ = os.environ if environ is None else environ
        config = config or Config.from_env(environ)

        try:
            repo = git.Repo(cwd, search_parent_directories=True)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            logger.debug(f"Repository discovery failed for {cwd}: {e}")
            raise NotAGitRepositoryError(cwd)

        try:
            # common_dir is the main .git even when cwd is a linked worktree
            git_dir = os.path.realpath(repo.common_dir)
        finally:
            repo.close()

        if os.path.basename(git_dir) == ".git":
            repo_root = os.path.dirname(git_dir)
        else:
            repo_root = git_dir  # bare repository

        storage_dir = os.path.join(git_dir, config.storage_dir_name)
        env = {key: environ[key] for key in ENV_KEYS if key in environ}

        logger.debug(f"Repository root: {repo_root}, storage: {storage_dir}")
        return cls(
            cwd=cwd,
            repo_root=repo_root,
            git_dir=git_dir,
            storage_dir=storage_dir,
            config=config,
            env=env,
        )
