"""Core result data structures for scans and hook pipelines."""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional

from .status import CheckStatus


@dataclass(frozen=True)
class Violation:
    """A file whose content matched a sensitive pattern."""

    file_path: str
    rule_name: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass
class ScanResult:
    """Bundle the violations found while scanning one context."""

    label: str = ""
    violations: List[Violation] = field(default_factory=list)
    skipped_files: List[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.violations

    def add_violation(self, violation: Violation) -> None:
        self.violations.append(violation)

    def rule_names(self, file_path: Optional[str] = None) -> List[str]:
        """Return the rule names that fired, optionally for a single file."""

        return [
            violation.rule_name
            for violation in self.violations
            if file_path is None or violation.file_path == file_path
        ]

    def to_dict(self) -> Dict[str, object]:
        return {
            "label": self.label,
            "violations": [violation.to_dict() for violation in self.violations],
            "skipped_files": list(self.skipped_files),
            "passed": self.passed,
        }

    def exit_code(self) -> int:
        return 0 if self.passed else 1


@dataclass
class CheckOutcome:
    """Capture the result of a single pipeline step."""

    name: str
    status: CheckStatus
    message: str = ""
    output: str = ""

    def to_dict(self) -> Dict[str, str]:
        data = asdict(self)
        data["status"] = self.status.value
        return data


@dataclass
class HookReport:
    """Aggregate every step a hook ran."""

    hook: str
    scans: List[ScanResult] = field(default_factory=list)
    checks: List[CheckOutcome] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not any(check.status.blocks for check in self.checks)

    def add(self, outcome: CheckOutcome) -> None:
        self.checks.append(outcome)

    def to_dict(self) -> Dict[str, object]:
        return {
            "hook": self.hook,
            "scans": [scan.to_dict() for scan in self.scans],
            "checks": [check.to_dict() for check in self.checks],
            "passed": self.passed,
        }

    def exit_code(self) -> int:
        return 0 if self.passed else 1


def format_summary_table(report: HookReport) -> str:
    """Create a human-readable summary table for console output."""

    lines: List[str] = []
    lines.append(f"Hook Summary ({report.hook})")
    lines.append("=" * 40)
    header = f"{'Check':<16} | {'Status':>8}"
    lines.append(header)
    lines.append("-" * len(header))
    for check in report.checks:
        lines.append(f"{check.name:<16} | {check.status.value:>8}")
    lines.append("-" * len(header))
    status = "PASS" if report.passed else "FAIL"
    lines.append(f"Status    : {status}")
    violations = sum(len(scan.violations) for scan in report.scans)
    lines.append(f"Violations: {violations}")
    return "\n".join(lines)
