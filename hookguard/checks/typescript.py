"""TypeScript compiler check."""

from __future__ import annotations

from hookguard.config import Capability
from hookguard.result import CheckOutcome
from hookguard.status import CheckStatus

from . import CheckContext, run_tool, skipped_by_config


class TypeScriptCheck:
    """Run ``npx tsc --noEmit`` for TypeScript projects."""

    name = "typecheck"
    capability = Capability.TYPECHECK

    def run(self, context: CheckContext) -> CheckOutcome:
        skipped = skipped_by_config(self, context, "TypeScript check")
        if skipped:
            return skipped
        if not context.project.is_typescript:
            return CheckOutcome(self.name, CheckStatus.SKIPPED, "Not a TypeScript project")
        if context.which("npx") is None:
            return CheckOutcome(self.name, CheckStatus.SKIPPED, "npx not found on PATH")

        context.reporter.heading("📝 Running TypeScript check...")
        return run_tool(
            self,
            context,
            ["npx", "tsc", "--noEmit"],
            "TypeScript check",
            "Please fix TypeScript errors before committing.",
        )
