"""Fakes shared by the test modules."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

from hookguard.report import Reporter
from hookguard.utils.process import CommandResult

Response = Union[CommandResult, Exception]


def ok(args: Sequence[str], stdout: Union[str, bytes] = b"") -> CommandResult:
    data = stdout.encode("utf-8") if isinstance(stdout, str) else stdout
    return CommandResult(args=tuple(args), returncode=0, stdout=data)


def fail(args: Sequence[str], returncode: int = 1, stdout: str = "", stderr: str = "") -> CommandResult:
    return CommandResult(
        args=tuple(args),
        returncode=returncode,
        stdout=stdout.encode("utf-8"),
        stderr=stderr.encode("utf-8"),
    )


class FakeRunner:
    """Answer commands from a table; anything unknown exits 1."""

    def __init__(self, responses: Optional[Dict[Tuple[str, ...], Response]] = None) -> None:
        self.responses: Dict[Tuple[str, ...], Response] = dict(responses or {})
        self.calls: List[Tuple[str, ...]] = []

    def add(self, args: Sequence[str], response: Response) -> None:
        self.responses[tuple(args)] = response

    def __call__(self, args: Sequence[str], cwd: Optional[Path] = None) -> CommandResult:
        key = tuple(args)
        self.calls.append(key)
        response = self.responses.get(key)
        if response is None:
            return fail(key, stderr="unexpected command")
        if isinstance(response, Exception):
            raise response
        return response


def entry_lookup(commit: str, path: str) -> Tuple[str, ...]:
    """The command ``GitRepository`` uses to find ``path`` in the index or a commit."""

    if commit:
        return ("git", "--literal-pathspecs", "ls-tree", "-z", "--full-tree", commit, "--", path)
    return ("git", "--literal-pathspecs", "ls-files", "--stage", "-z", "--", path)


def add_blobs(runner: FakeRunner, commit: str, files: Dict[str, Optional[bytes]]) -> None:
    """Register index (``commit=""``) or tree entries plus their blobs.

    A ``None`` content makes the path missing from that tree.
    """

    for index, (path, content) in enumerate(files.items()):
        lookup = entry_lookup(commit, path)
        if content is None:
            runner.add(lookup, ok(lookup))
            continue
        oid = f"{commit or 'index'}-blob-{index}"
        if commit:
            record = f"100644 blob {oid}\t{path}\0"
        else:
            record = f"100644 {oid} 0\t{path}\0"
        runner.add(lookup, ok(lookup, record))
        cat = ("git", "cat-file", "blob", oid)
        runner.add(cat, ok(cat, content))


def staged_repo(files: Dict[str, Optional[bytes]], branch: str = "feature") -> FakeRunner:
    runner = FakeRunner()
    diff = ("git", "diff", "--cached", "--name-only", "-z")
    runner.add(diff, ok(diff, "".join(f"{path}\0" for path in files)))
    add_blobs(runner, "", files)
    head = ("git", "symbolic-ref", "--quiet", "--short", "HEAD")
    runner.add(head, ok(head, branch + "\n"))
    return runner


def quiet_reporter() -> Tuple[Reporter, io.StringIO]:
    stream = io.StringIO()
    return Reporter(color="never", file=stream), stream
