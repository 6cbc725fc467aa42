"""pre-push: scan every outgoing commit, then build and run e2e tests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from hookguard.checks.cypress import CypressCheck
from hookguard.checks.npm import BuildCheck
from hookguard.result import HookReport
from hookguard.scanner import NULL_SHA, scan_commits
from hookguard.utils.git import GitRepository

from . import HookEnvironment, finish, run_checks, secrets_outcome

HOOK_NAME = "pre-push"
BRANCH_PREFIX = "refs/heads/"
CHECKS = (BuildCheck(), CypressCheck())


@dataclass(frozen=True)
class PushRef:
    """One ``<local ref> <local sha> <remote ref> <remote sha>`` line from git."""

    local_ref: str
    local_sha: str
    remote_ref: str
    remote_sha: str

    @property
    def is_delete(self) -> bool:
        return self.local_sha == NULL_SHA

    @property
    def is_new_branch(self) -> bool:
        return self.remote_sha == NULL_SHA

    @property
    def remote_branch(self) -> str:
        if self.remote_ref.startswith(BRANCH_PREFIX):
            return self.remote_ref[len(BRANCH_PREFIX):]
        return self.remote_ref


def parse_push_refs(lines: Iterable[str]) -> List[PushRef]:
    """Parse the ref lines git writes to a pre-push hook's stdin."""

    refs: List[PushRef] = []
    for line in lines:
        fields = line.split()
        if not fields:
            continue
        if len(fields) != 4:
            raise ValueError(f"Malformed pre-push line: {line.strip()!r}")
        refs.append(PushRef(*fields))
    return refs


def commits_to_push(repo: GitRepository, refs: Iterable[PushRef], remote: str = "") -> List[str]:
    """Return the outgoing commit ids, oldest first and without duplicates."""

    commits: List[str] = []
    seen = set()
    for ref in refs:
        if ref.is_delete:
            continue
        if ref.is_new_branch:
            exclude = f"--remotes={remote}" if remote else "--remotes"
            revisions = repo.rev_list(ref.local_sha, "--not", exclude)
        else:
            revisions = repo.rev_list(f"{ref.remote_sha}..{ref.local_sha}")
        for commit in revisions:
            if commit not in seen:
                seen.add(commit)
                commits.append(commit)
    return commits


def run_pre_push(env: HookEnvironment, refs: List[PushRef], remote: str = "") -> HookReport:
    report = HookReport(hook=HOOK_NAME)

    def scan_outgoing():
        commits = commits_to_push(env.repo, refs, remote)
        return scan_commits(
            commits,
            env.repo.commit_files,
            env.repo.commit_resolver,
            registry=env.registry,
            reporter=env.reporter,
        )

    outcome = secrets_outcome(scan_outgoing, report, env.reporter)
    report.add(outcome)
    if not outcome.status.blocks:
        if refs:
            is_main = any(env.config.is_main_branch(ref.remote_branch) for ref in refs if not ref.is_delete)
        else:
            is_main = env.config.is_main_branch(env.repo.current_branch())
        run_checks(report, CHECKS, env.check_context(is_main))
    return finish(report, env.reporter, "push")
