"""Command-line interface for gw.

This package provides the CLI entry point, argument parsing and the
shell wrapper.
"""

from .main import main
from .args import parse_args

__all__ = ["main", "parse_args"]
