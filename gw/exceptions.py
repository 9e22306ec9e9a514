"""Custom exceptions for gw"""

from typing import Optional


class GwError(Exception):
    """Base exception for all gw errors."""
    pass


class NotAGitRepositoryError(GwError):
    """Exception raised when gw runs outside a git repository."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Not a git repository: {path}")


class GitOperationError(GwError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, target: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.target = target
        self.message = message

        error_msg = f"git {operation} failed"
        if target:
            error_msg += f" for '{target}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class PickerUnavailableError(GwError):
    """Exception raised when the fuzzy picker executable cannot be run."""

    def __init__(self, command: str):
        self.command = command
        super().__init__(f"Picker '{command}' is not installed or not on PATH")
