"""Exception types raised by repofleet components."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class RepofleetError(RuntimeError):
    """Base class for repofleet failures."""


class ConfigError(RepofleetError):
    """Raised when the configuration file cannot be parsed."""


class GitCommandError(RepofleetError):
    """Raised when a git subprocess fails or times out."""

    def __init__(
        self,
        args: Sequence[str],
        cwd: Path,
        detail: str = "",
        *,
        message: str | None = None,
    ) -> None:
        self.command = list(args)
        self.cwd = cwd
        self.detail = detail.strip()
        if message is None:
            message = f"`{' '.join(self.command)}` failed in {cwd}"
            if self.detail:
                message = f"{message}: {self.detail}"
        super().__init__(message)


class NotARepositoryError(GitCommandError):
    """Raised when a directory is not inside a Git work tree."""

    def __init__(self, args: Sequence[str], cwd: Path, detail: str = "") -> None:
        super().__init__(
            args, cwd, detail, message=f"Not inside a Git repository at '{cwd}'"
        )


class SlugParseError(RepofleetError):
    """Raised when a remote URL cannot be reduced to an owner/name slug."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Failed to parse git URL: {url or '(empty)'}")


class OwnershipReadError(RepofleetError):
    """Raised when a CODEOWNERS file exists but cannot be read."""


__all__ = [
    "ConfigError",
    "GitCommandError",
    "NotARepositoryError",
    "OwnershipReadError",
    "RepofleetError",
    "SlugParseError",
]
