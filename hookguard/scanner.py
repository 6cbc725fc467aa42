"""Secret-pattern scanning over staged files and pushed commits."""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional, Sequence, Union

from .errors import ContentNotFound, ContentSourceFault
from .report import Reporter
from .result import ScanResult, Violation
from .rules import PatternRegistry, Rule, ScanContext
from .rules.catalog import DEFAULT_REGISTRY

ContentResolver = Callable[[str], Union[bytes, str]]

NULL_SHA = "0" * 40
BINARY_SNIFF_BYTES = 8000

REMEDIATION_TYPES = (
    "API keys (Google, OpenAI, AWS, etc.)",
    "Database connection strings",
    "Slack webhooks and tokens",
    "Private keys and certificates",
    "Environment variables with secrets",
    "Passwords and authentication tokens",
)
REMEDIATION_STEPS = (
    "Remove the sensitive data from the file",
    "Add the file to .gitignore if it contains secrets",
    "Use environment variables instead",
    "Consider using a secrets management service",
)


def scan(
    context: ScanContext,
    content_resolver: ContentResolver,
    registry: Optional[PatternRegistry] = None,
    reporter: Optional[Reporter] = None,
) -> ScanResult:
    """Apply every rule to every file in ``context``.

    Files the resolver reports as :class:`ContentNotFound` and binary blobs are
    skipped. Any other resolver failure aborts the scan as
    :class:`ContentSourceFault`.
    """

    registry = registry or DEFAULT_REGISTRY
    reporter = reporter or Reporter()
    reporter.heading(f"🔒 Checking for sensitive data in {context.label}...")

    result = ScanResult(label=context.label)
    for file_path in context.files:
        try:
            content = _resolve(content_resolver, file_path, context)
        except ContentSourceFault as fault:
            reporter.error(f"❌ Secret scan could not be completed: {fault}")
            raise
        if content is None:
            result.skipped_files.append(file_path)
            continue

        for rule in registry.rules():
            if registry.is_excluded(rule, file_path):
                continue
            if rule.matches(content):
                violation = Violation(file_path=file_path, rule_name=rule.name)
                result.add_violation(violation)
                _report_violation(reporter, violation, rule)

    if result.passed:
        reporter.success("✅ No sensitive data detected")
    else:
        _report_remediation(reporter)
        reporter.error(f"🚨 Sensitive data detected in {context.label}: {len(result.violations)} violation(s)")
    return result


def scan_commits(
    commits: Iterable[str],
    files_for_commit: Callable[[str], Sequence[str]],
    resolver_for_commit: Callable[[str], ContentResolver],
    registry: Optional[PatternRegistry] = None,
    reporter: Optional[Reporter] = None,
) -> List[ScanResult]:
    """Scan each commit's changed files against the commit's own tree."""

    results: List[ScanResult] = []
    for commit in commits:
        if commit == NULL_SHA:
            continue
        context = ScanContext.of(f"commit {commit}", files_for_commit(commit))
        results.append(scan(context, resolver_for_commit(commit), registry=registry, reporter=reporter))
    return results


def is_binary(content: bytes) -> bool:
    return b"\0" in content[:BINARY_SNIFF_BYTES]


def _resolve(content_resolver: ContentResolver, file_path: str, context: ScanContext) -> Optional[str]:
    try:
        content = content_resolver(file_path)
    except ContentNotFound:
        return None
    except ContentSourceFault:
        raise
    except Exception as exc:
        raise ContentSourceFault(file_path, context.label, str(exc)) from exc

    if isinstance(content, str):
        return content
    if is_binary(content):
        return None
    return content.decode("utf-8", errors="replace")


def _report_violation(reporter: Reporter, violation: Violation, rule: Rule) -> None:
    reporter.error("❌ SECURITY VIOLATION DETECTED!")
    reporter.error(f"File: {violation.file_path}")
    reporter.error(f"Rule: {rule.name} ({rule.description})")
    reporter.error(f"Pattern: {rule.pattern.pattern}")
    reporter.line()


def _report_remediation(reporter: Reporter) -> None:
    reporter.warn("Common sensitive data types:")
    for item in REMEDIATION_TYPES:
        reporter.line(f"  • {item}")
    reporter.line()
    reporter.warn("To fix this:")
    for index, step in enumerate(REMEDIATION_STEPS, start=1):
        reporter.line(f"  {index}. {step}")
    reporter.line()
