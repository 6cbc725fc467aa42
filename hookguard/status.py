"""Outcome states for hook pipeline steps."""

from __future__ import annotations

from enum import Enum


class CheckStatus(str, Enum):
    """Enumerate the states a pipeline step can finish in."""

    PASSED = "PASSED"
    FAILED = "FAILED"
    SKIPPED = "SKIPPED"
    ERROR = "ERROR"

    @property
    def blocks(self) -> bool:
        """Return ``True`` when this status must block the git operation."""

        return self in (CheckStatus.FAILED, CheckStatus.ERROR)
