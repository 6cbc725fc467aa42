"""End-to-end Cypress test run, gated on a live dev server."""

from __future__ import annotations

import socket
from urllib.parse import urlsplit

from hookguard.config import Capability
from hookguard.result import CheckOutcome
from hookguard.status import CheckStatus

from . import CheckContext, run_tool, skipped_by_config

PROBE_TIMEOUT_SECONDS = 2.0


def dev_server_reachable(url: str, timeout: float = PROBE_TIMEOUT_SECONDS) -> bool:
    """Return ``True`` if something accepts TCP connections at ``url``."""

    parts = urlsplit(url)
    host = parts.hostname or "localhost"
    port = parts.port or (443 if parts.scheme == "https" else 80)
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError:
        return False


class CypressCheck:
    """Run ``npm run test`` when the project ships Cypress specs."""

    name = "e2e"
    capability = Capability.E2E

    def run(self, context: CheckContext) -> CheckOutcome:
        skipped = skipped_by_config(self, context, "Cypress tests")
        if skipped:
            return skipped
        if not context.package_json.is_file() or not (context.root / "cypress").is_dir():
            return CheckOutcome(self.name, CheckStatus.SKIPPED, "No Cypress setup found")

        reporter = context.reporter
        if '"test"' not in context.package_json.read_text(encoding="utf-8"):
            message = "No test script found, skipping Cypress tests"
            reporter.warn(f"⚠️  {message}")
            return CheckOutcome(self.name, CheckStatus.SKIPPED, message)

        probe = context.server_probe or dev_server_reachable
        if not probe(context.dev_server_url):
            if context.is_main_branch:
                message = f"Dev server not running at {context.dev_server_url} - required for main branch"
                reporter.error(f"❌ {message}")
                reporter.error("Please start server with: npm run dev")
                return CheckOutcome(self.name, CheckStatus.FAILED, message)
            message = f"Dev server not running at {context.dev_server_url} - skipping Cypress tests"
            reporter.warn(f"⚠️  {message}")
            reporter.warn("💡 Consider running tests locally before pushing: npm run dev && npm run test")
            return CheckOutcome(self.name, CheckStatus.SKIPPED, message)

        reporter.heading("🧪 Running Cypress tests...")
        return run_tool(
            self,
            context,
            ["npm", "run", "test"],
            "Cypress tests",
            "Please fix failing tests before pushing.",
        )
