"""Subprocess helpers shared by git plumbing and quality checks."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence, Tuple


@dataclass(frozen=True)
class CommandResult:
    """Captured outcome of an external command."""

    args: Tuple[str, ...]
    returncode: int
    stdout: bytes = b""
    stderr: bytes = b""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def text(self) -> str:
        return self.stdout.decode("utf-8", errors="replace")

    @property
    def output(self) -> str:
        """Return stdout followed by stderr, like ``2>&1`` in a shell."""

        combined = self.stdout + self.stderr
        return combined.decode("utf-8", errors="replace")


Runner = Callable[[Sequence[str], Optional[Path]], CommandResult]


def run_command(args: Sequence[str], cwd: Optional[Path] = None) -> CommandResult:
    """Run ``args`` and capture its output; raises ``OSError`` if it cannot start."""

    completed = subprocess.run(list(args), cwd=cwd, capture_output=True, check=False)
    return CommandResult(
        args=tuple(args),
        returncode=completed.returncode,
        stdout=completed.stdout or b"",
        stderr=completed.stderr or b"",
    )
