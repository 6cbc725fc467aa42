"""Exception hierarchy for hookguard."""

from __future__ import annotations


class HookGuardError(Exception):
    """Base class for all hookguard errors."""


class ContentNotFound(HookGuardError):
    """A path has no content in the requested context (e.g. a staged deletion)."""

    def __init__(self, path: str, context: str = "") -> None:
        self.path = path
        self.context = context
        where = f" in {context}" if context else ""
        super().__init__(f"{path} not found{where}")


class ContentSourceFault(HookGuardError):
    """The content source itself failed while resolving a path."""

    def __init__(self, path: str, context: str = "", detail: str = "") -> None:
        self.path = path
        self.context = context
        self.detail = detail
        where = f" in {context}" if context else ""
        message = f"could not read {path}{where}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ConfigError(HookGuardError):
    """Raised when ``.hookguard.yml`` is malformed."""


class GitError(HookGuardError):
    """A git command needed to build a scan context failed."""


class NotABlob(ContentNotFound):
    """The entry is a submodule commit, not file content."""

    def __str__(self) -> str:
        return f"{self.path} is a submodule entry, not a file"
