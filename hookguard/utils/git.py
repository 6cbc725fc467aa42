"""git plumbing used to build scan contexts and resolve file content."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from hookguard.errors import ContentNotFound, ContentSourceFault, GitError, NotABlob

from .process import CommandResult, Runner, run_command

# Submodule (gitlink) entries point at a commit in another repository.
GITLINK_MODE = "160000"


class GitRepository:
    """Thin wrapper over the git CLI rooted at ``root``."""

    def __init__(self, root: Optional[Path] = None, runner: Runner = run_command) -> None:
        self.root = Path(root) if root is not None else None
        self._runner = runner

    def _git(self, *args: str) -> CommandResult:
        return self._runner(["git", *args], self.root)

    def _checked(self, *args: str) -> CommandResult:
        try:
            result = self._git(*args)
        except OSError as exc:
            raise GitError(f"git {' '.join(args)} could not run: {exc}") from exc
        if not result.ok:
            detail = result.stderr.decode("utf-8", errors="replace").strip()
            raise GitError(f"git {' '.join(args)} failed ({result.returncode}): {detail}")
        return result

    @staticmethod
    def _lines(result: CommandResult) -> List[str]:
        return [line.strip() for line in result.text.splitlines() if line.strip()]

    @staticmethod
    def _paths(result: CommandResult) -> List[str]:
        """Split ``-z`` output; paths are kept byte-exact, unquoted and unstripped."""

        return [os.fsdecode(item) for item in result.stdout.split(b"\0") if item]

    # ------------------------------------------------------------------
    # Repository metadata
    # ------------------------------------------------------------------
    def toplevel(self) -> Path:
        return Path(self._checked("rev-parse", "--show-toplevel").text.strip())

    def name(self) -> str:
        return self.toplevel().name

    def hooks_dir(self) -> Path:
        path = Path(self._checked("rev-parse", "--git-path", "hooks").text.strip())
        if not path.is_absolute() and self.root is not None:
            path = self.root / path
        return path

    def current_branch(self) -> str:
        """Return the checked-out branch name, or ``""`` on a detached HEAD."""

        result = self._git("symbolic-ref", "--quiet", "--short", "HEAD")
        return result.text.strip() if result.ok else ""

    # ------------------------------------------------------------------
    # File lists
    # ------------------------------------------------------------------
    def staged_files(self) -> List[str]:
        return self._paths(self._checked("diff", "--cached", "--name-only", "-z"))

    def commit_files(self, commit: str) -> List[str]:
        """Return the paths ``commit`` changed; a root commit lists its whole tree."""

        return self._paths(
            self._checked("diff-tree", "--no-commit-id", "--name-only", "-r", "-z", "--root", commit)
        )

    def rev_list(self, *revisions: str) -> List[str]:
        """Return commit ids selected by ``revisions``, oldest first."""

        return self._lines(self._checked("rev-list", "--reverse", *revisions))

    # ------------------------------------------------------------------
    # Content resolution
    # ------------------------------------------------------------------
    def _entry(self, args: Tuple[str, ...], path: str, context: str) -> Tuple[str, str]:
        """Return ``(mode, object id)`` of the index or tree entry for ``path``."""

        try:
            listing = self._git("--literal-pathspecs", *args, "--", path)
        except OSError as exc:
            raise ContentSourceFault(path, context, str(exc)) from exc
        if not listing.ok:
            raise ContentSourceFault(path, context, listing.stderr.decode("utf-8", errors="replace").strip())

        for record in listing.stdout.split(b"\0"):
            meta, sep, name = record.partition(b"\t")
            if not sep or os.fsdecode(name) != path:
                continue
            fields = meta.decode("ascii", errors="replace").split()
            # ls-files: <mode> <oid> <stage>; ls-tree: <mode> <type> <oid>
            if args[0] == "ls-files":
                mode, oid, stage = fields
                if stage != "0":
                    continue
            else:
                mode, _, oid = fields
            return mode, oid
        raise ContentNotFound(path, context)

    def read_blob(self, path: str, context: str, commit: Optional[str] = None) -> bytes:
        """Return the content of ``path`` in the index, or in ``commit`` when given."""

        if commit is None:
            mode, oid = self._entry(("ls-files", "--stage", "-z"), path, context)
        else:
            mode, oid = self._entry(("ls-tree", "-z", "--full-tree", commit), path, context)
        if mode == GITLINK_MODE:
            raise NotABlob(path, context)

        try:
            blob = self._git("cat-file", "blob", oid)
        except OSError as exc:
            raise ContentSourceFault(path, context, str(exc)) from exc
        if not blob.ok:
            raise ContentSourceFault(path, context, blob.stderr.decode("utf-8", errors="replace").strip())
        return blob.stdout

    def staged_resolver(self) -> Callable[[str], bytes]:
        return lambda path: self.read_blob(path, "staged files")

    def commit_resolver(self, commit: str) -> Callable[[str], bytes]:
        return lambda path: self.read_blob(path, f"commit {commit}", commit)
