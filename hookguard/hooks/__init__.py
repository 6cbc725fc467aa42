"""Hook orchestration: wire the secret scan and quality checks together."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from hookguard.checks import Check, CheckContext
from hookguard.checks.project import detect_project
from hookguard.config import CONFIG_FILENAME, HookConfig, load_config
from hookguard.errors import ContentSourceFault, GitError
from hookguard.report import Reporter
from hookguard.result import CheckOutcome, HookReport, ScanResult
from hookguard.rules import PatternRegistry
from hookguard.rules.catalog import DEFAULT_REGISTRY
from hookguard.status import CheckStatus
from hookguard.utils.git import GitRepository
from hookguard.utils.process import Runner, run_command

SECRETS_STEP = "secrets"


@dataclass
class HookEnvironment:
    """Everything a hook needs, built once per invocation."""

    repo: GitRepository
    root: Path
    config: HookConfig
    reporter: Reporter
    registry: PatternRegistry
    runner: Runner = run_command
    server_probe: Optional[Callable[[str], bool]] = None

    def check_context(self, is_main_branch: bool = False) -> CheckContext:
        project = detect_project(self.root)
        return CheckContext(
            root=self.root,
            project=project,
            reporter=self.reporter,
            skipped=self.config.skipped_for(project.repo_name),
            runner=self.runner,
            is_main_branch=is_main_branch,
            dev_server_url=self.config.dev_server_url,
            server_probe=self.server_probe,
        )


def build_environment(
    root: Optional[Path] = None,
    config_path: Optional[Path] = None,
    runner: Runner = run_command,
    color: Optional[str] = None,
) -> HookEnvironment:
    """Locate the repository, load its configuration and prepare a reporter."""

    repo = GitRepository(root, runner=runner)
    toplevel = repo.toplevel()
    config = load_config(config_path or toplevel / CONFIG_FILENAME)
    return HookEnvironment(
        repo=GitRepository(toplevel, runner=runner),
        root=toplevel,
        config=config,
        reporter=Reporter(color or config.color),
        registry=DEFAULT_REGISTRY.with_exclusions(config.exclusions),
        runner=runner,
    )


def secrets_outcome(scan: Callable[[], List[ScanResult]], report: HookReport, reporter: Reporter) -> CheckOutcome:
    """Run ``scan`` and fold its results, or its failure, into one outcome."""

    try:
        results = scan()
    except (ContentSourceFault, GitError) as exc:
        message = f"Secret scan could not be completed: {exc}"
        if isinstance(exc, GitError):
            # the scanner reports content faults itself
            reporter.error(f"❌ {message}")
        reporter.error("⚠️  The check did not finish; investigate the git tooling, not the file content.")
        return CheckOutcome(SECRETS_STEP, CheckStatus.ERROR, message)

    report.scans.extend(results)
    violations = sum(len(result.violations) for result in results)
    if violations:
        return CheckOutcome(SECRETS_STEP, CheckStatus.FAILED, f"Sensitive data detected ({violations} violation(s))")
    return CheckOutcome(SECRETS_STEP, CheckStatus.PASSED, "No sensitive data detected")


def run_checks(report: HookReport, checks: Iterable[Check], context: CheckContext) -> None:
    """Run ``checks`` in order until one blocks."""

    for check in checks:
        outcome = check.run(context)
        report.add(outcome)
        if outcome.status.blocks:
            return


def finish(report: HookReport, reporter: Reporter, operation: str) -> HookReport:
    if report.passed:
        reporter.success(f"✅ All {report.hook} checks passed")
        return report
    reporter.error(f"🚨 {operation.upper()} BLOCKED: {report.hook} checks failed")
    for check in report.checks:
        if check.status.blocks:
            reporter.error(f"  - {check.name}: {check.message}")
    return report
