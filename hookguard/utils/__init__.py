"""Utility helpers for hookguard."""

from .fileio import read_yaml_file
from .git import GitRepository
from .process import CommandResult, run_command

__all__ = [
    "read_yaml_file",
    "GitRepository",
    "CommandResult",
    "run_command",
]
