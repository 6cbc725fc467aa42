"""Detect what kind of project a repository holds."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

TSCONFIG_FILES = ("tsconfig.json", "tsconfig.app.json", "tsconfig.node.json")


@dataclass(frozen=True)
class ProjectInfo:
    repo_name: str
    is_typescript: bool = False


def detect_project(root: Path, repo_name: str = "") -> ProjectInfo:
    """Inspect marker files under ``root``."""

    is_typescript = any((root / name).is_file() for name in TSCONFIG_FILES)
    return ProjectInfo(repo_name=repo_name or root.name, is_typescript=is_typescript)
