"""Checks backed by ``npm run`` scripts."""

from __future__ import annotations

from hookguard.config import Capability
from hookguard.result import CheckOutcome
from hookguard.status import CheckStatus

from . import CheckContext, npm_script_available, run_tool, skipped_by_config


class LintCheck:
    """Run ``npm run lint`` when the project declares it."""

    name = "lint"
    capability = Capability.LINT

    def run(self, context: CheckContext) -> CheckOutcome:
        skipped = skipped_by_config(self, context, "linting")
        if skipped:
            return skipped
        if not npm_script_available(context, "lint"):
            return CheckOutcome(self.name, CheckStatus.SKIPPED, "No lint script found")

        context.reporter.heading("🧹 Running linter...")
        return run_tool(
            self,
            context,
            ["npm", "run", "lint"],
            "Linting",
            "Please fix linting errors before committing.",
        )


class BuildCheck:
    """Run ``npm run build`` to verify the project still builds."""

    name = "build"
    capability = Capability.BUILD

    def run(self, context: CheckContext) -> CheckOutcome:
        skipped = skipped_by_config(self, context, "build check")
        if skipped:
            return skipped
        if not npm_script_available(context, "build"):
            message = "No build script found, skipping build check"
            context.reporter.warn(f"⚠️  {message}")
            return CheckOutcome(self.name, CheckStatus.SKIPPED, message)

        context.reporter.heading("🔨 Running build check...")
        return run_tool(
            self,
            context,
            ["npm", "run", "build"],
            "Build check",
            "Please fix build errors before pushing.",
        )
