"""pre-commit: scan staged files, then type check and lint."""

from __future__ import annotations

from hookguard.checks.npm import LintCheck
from hookguard.checks.typescript import TypeScriptCheck
from hookguard.result import HookReport
from hookguard.rules import ScanContext
from hookguard.scanner import scan

from . import HookEnvironment, finish, run_checks, secrets_outcome

HOOK_NAME = "pre-commit"
CHECKS = (TypeScriptCheck(), LintCheck())


def run_pre_commit(env: HookEnvironment) -> HookReport:
    report = HookReport(hook=HOOK_NAME)

    def scan_staged():
        context = ScanContext.of("staged files", env.repo.staged_files())
        return [scan(context, env.repo.staged_resolver(), registry=env.registry, reporter=env.reporter)]

    outcome = secrets_outcome(scan_staged, report, env.reporter)
    report.add(outcome)
    if not outcome.status.blocks:
        run_checks(report, CHECKS, env.check_context(env.config.is_main_branch(env.repo.current_branch())))
    return finish(report, env.reporter, "commit")
