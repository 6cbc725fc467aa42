"""Command-line entry point for hookguard."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import IO, List, Optional

from .errors import ConfigError, GitError
from .hooks import HookEnvironment, build_environment, secrets_outcome
from .hooks.pre_commit import run_pre_commit
from .hooks.pre_push import parse_push_refs, run_pre_push
from .report import COLOR_MODES
from .result import HookReport, format_summary_table
from .rules import ScanContext
from .rules.catalog import DEFAULT_REGISTRY
from .scanner import scan, scan_commits
from .utils.git import GitRepository

HOOK_MARKER = "# installed by hookguard"
HOOK_TEMPLATE = """#!/bin/sh
{marker}
exec "{python}" -m hookguard {hook} "$@"
"""
INSTALLABLE_HOOKS = ("pre-commit", "pre-push")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hookguard",
        description="Git hook runner: secret scanning plus type, lint, build and e2e checks.",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to the hook configuration (defaults to <repo>/.hookguard.yml).",
    )
    common.add_argument(
        "--color",
        choices=COLOR_MODES,
        default=None,
        help="Override the configured color mode.",
    )
    common.add_argument(
        "--out",
        "--output",
        dest="output_path",
        type=str,
        default=None,
        help="Path to write the structured report (e.g., artifacts/hook.json).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("pre-commit", parents=[common], help="Run the pre-commit pipeline.")

    pre_push = subparsers.add_parser("pre-push", parents=[common], help="Run the pre-push pipeline.")
    pre_push.add_argument("remote", nargs="?", default="", help="Remote name passed by git.")
    pre_push.add_argument("url", nargs="?", default="", help="Remote URL passed by git.")

    scan_parser = subparsers.add_parser("scan", parents=[common], help="Run only the secret scan.")
    scan_parser.add_argument(
        "--commit",
        dest="commits",
        action="append",
        default=[],
        help="Scan the files changed by this commit instead of the index (repeatable).",
    )

    install = subparsers.add_parser("install", help="Install git hook shims into the current repository.")
    install.add_argument("--force", action="store_true", help="Overwrite hooks not written by hookguard.")

    subparsers.add_parser("rules", help="List the built-in detection rules.")
    return parser


def run_scan_only(env: HookEnvironment, commits: List[str]) -> HookReport:
    report = HookReport(hook="scan")

    def run():
        if commits:
            return scan_commits(
                commits,
                env.repo.commit_files,
                env.repo.commit_resolver,
                registry=env.registry,
                reporter=env.reporter,
            )
        context = ScanContext.of("staged files", env.repo.staged_files())
        return [scan(context, env.repo.staged_resolver(), registry=env.registry, reporter=env.reporter)]

    report.add(secrets_outcome(run, report, env.reporter))
    return report


def write_output(report: HookReport, output_path: Optional[str], env: HookEnvironment) -> None:
    env.reporter.line()
    env.reporter.line(format_summary_table(report))
    if output_path:
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(json.dumps(report.to_dict(), indent=2), encoding="utf-8")
        env.reporter.line(f"\nReport written to {output_path}")


def install_hooks(hooks_dir: Path, force: bool = False, python: str = sys.executable) -> List[Path]:
    """Write hook shims; existing foreign hooks are left alone unless ``force``."""

    hooks_dir.mkdir(parents=True, exist_ok=True)
    installed: List[Path] = []
    for hook in INSTALLABLE_HOOKS:
        path = hooks_dir / hook
        if path.exists() and not force and HOOK_MARKER not in path.read_text(encoding="utf-8", errors="replace"):
            print(f"Skipping {hook}: existing hook not managed by hookguard (use --force)", file=sys.stderr)
            continue
        path.write_text(HOOK_TEMPLATE.format(marker=HOOK_MARKER, python=python, hook=hook), encoding="utf-8")
        path.chmod(0o755)
        installed.append(path)
        print(f"Installed {hook} -> {path}")
    return installed


def list_rules() -> None:
    for rule in DEFAULT_REGISTRY.rules():
        print(f"{rule.name:<28} {rule.description}")
        print(f"{'':<28} {rule.pattern.pattern}")
    for exclusion in DEFAULT_REGISTRY.exclusions:
        print(f"\n{exclusion.rule_name} is skipped for paths containing: {', '.join(exclusion.path_substrings)}")


def main(argv: Optional[List[str]] = None, stdin: Optional[IO[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "rules":
        list_rules()
        return 0

    try:
        if args.command == "install":
            installed = install_hooks(GitRepository().hooks_dir(), force=args.force)
            return 0 if installed else 1

        env = build_environment(config_path=args.config, color=args.color)
    except (ConfigError, GitError) as exc:
        print(f"hookguard: {exc}", file=sys.stderr)
        return 2

    if args.command == "pre-commit":
        report = run_pre_commit(env)
    elif args.command == "pre-push":
        try:
            refs = parse_push_refs(stdin if stdin is not None else sys.stdin)
        except ValueError as exc:
            print(f"hookguard: {exc}", file=sys.stderr)
            return 2
        report = run_pre_push(env, refs, args.remote)
    else:
        report = run_scan_only(env, args.commits)

    write_output(report, args.output_path, env)
    return report.exit_code()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
