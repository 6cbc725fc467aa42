"""Quality checks run by the hooks alongside the secret scan."""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, FrozenSet, Optional, Protocol, Sequence

from hookguard.config import DEFAULT_DEV_SERVER_URL, Capability
from hookguard.report import Reporter
from hookguard.result import CheckOutcome
from hookguard.status import CheckStatus
from hookguard.utils.process import Runner, run_command

from .project import ProjectInfo


class Check(Protocol):
    """Protocol implemented by all quality checks."""

    name: str
    capability: Capability

    def run(self, context: "CheckContext") -> CheckOutcome:
        """Execute the check and report progress through ``context.reporter``."""


@dataclass
class CheckContext:
    """Bundle inputs shared across checks."""

    root: Path
    project: ProjectInfo
    reporter: Reporter
    skipped: FrozenSet[Capability] = frozenset()
    runner: Runner = run_command
    is_main_branch: bool = False
    dev_server_url: str = DEFAULT_DEV_SERVER_URL
    which: Callable[[str], Optional[str]] = shutil.which
    server_probe: Optional[Callable[[str], bool]] = field(default=None)

    @property
    def package_json(self) -> Path:
        return self.root / "package.json"


def skipped_by_config(check: Check, context: CheckContext, label: str) -> Optional[CheckOutcome]:
    """Return a SKIPPED outcome when the repository opted out of ``check``."""

    if check.capability not in context.skipped:
        return None
    message = f"Skipping {label} for {context.project.repo_name} (disabled in configuration)"
    context.reporter.warn(f"⚠️  {message}")
    return CheckOutcome(check.name, CheckStatus.SKIPPED, message)


def npm_script_available(context: CheckContext, script: str) -> bool:
    """Mirror ``npm run <script> --dry-run`` as a probe for a declared script."""

    if not context.package_json.is_file():
        return False
    try:
        probe = context.runner(["npm", "run", script, "--dry-run"], context.root)
    except OSError:
        return False
    return probe.ok


def run_tool(
    check: Check,
    context: CheckContext,
    args: Sequence[str],
    label: str,
    fix_hint: str,
) -> CheckOutcome:
    """Run an external tool and turn its exit status into an outcome."""

    reporter = context.reporter
    try:
        result = context.runner(list(args), context.root)
    except OSError as exc:
        message = f"{label} could not start: {exc}"
        reporter.error(f"❌ {message}")
        return CheckOutcome(check.name, CheckStatus.ERROR, message)

    if result.ok:
        message = f"{label} passed"
        reporter.success(f"✅ {message}")
        return CheckOutcome(check.name, CheckStatus.PASSED, message, result.output)

    message = f"{label} failed"
    reporter.error(f"❌ {message}")
    reporter.error(f"{label} output:")
    reporter.output(result.output)
    reporter.error(fix_hint)
    return CheckOutcome(check.name, CheckStatus.FAILED, message, result.output)


__all__ = [
    "Check",
    "CheckContext",
    "ProjectInfo",
    "npm_script_available",
    "run_tool",
    "skipped_by_config",
]
