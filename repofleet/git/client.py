"""Thin wrapper around the git commands repofleet depends on."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Iterable, Sequence

from ..errors import GitCommandError, NotARepositoryError
from ..logging import get_logger
from .url import parse_git_url

Runner = Callable[..., str]


class GitClient:
    """Runs git subprocesses in a repository directory and returns their stdout."""

    def __init__(self, runner: Runner | None = None, *, timeout: float | None = None) -> None:
        self._runner = runner or self._default_runner
        self._timeout = timeout
        self.logger = get_logger("git")

    def toplevel(self, path: Path) -> Path:
        """Return the canonical work-tree root containing ``path``."""
        args = ["git", "rev-parse", "--show-toplevel"]
        try:
            output = self._run(args, cwd=path)
        except GitCommandError as exc:
            raise NotARepositoryError(args, path, exc.detail) from exc
        root = output.rstrip("\n")
        if not root:
            raise NotARepositoryError(args, path)
        return Path(root).resolve()

    def remote_url(self, path: Path, remote: str = "origin") -> str:
        return self._run(["git", "remote", "get-url", remote], cwd=path).strip()

    def slug(self, path: Path, remote: str = "origin") -> str:
        """Resolve the owner/name slug from the remote URL of ``path``."""
        return parse_git_url(self.remote_url(path, remote))

    def shortlog(self, path: Path) -> str:
        return self._run(["git", "shortlog", "-s", "-n", "--all", "--no-merges"], cwd=path)

    def _run(self, args: Sequence[str], *, cwd: Path) -> str:
        self.logger.debug("Running %s in %s", " ".join(args), cwd)
        return self._runner(args, cwd=cwd, timeout=self._timeout)

    @staticmethod
    def _default_runner(
        args: Iterable[str],
        *,
        cwd: Path,
        timeout: float | None = None,
    ) -> str:
        command = list(args)
        try:
            completed = subprocess.run(
                command,
                cwd=str(cwd),
                check=True,
                text=True,
                capture_output=True,
                timeout=timeout,
                # shortlog reads from stdin when it is not a terminal
                stdin=subprocess.DEVNULL,
            )
        except subprocess.CalledProcessError as exc:
            raise GitCommandError(command, cwd, exc.stderr or "") from exc
        except subprocess.TimeoutExpired as exc:
            raise GitCommandError(command, cwd, f"timed out after {timeout}s") from exc
        except OSError as exc:
            raise GitCommandError(command, cwd, str(exc)) from exc
        return completed.stdout


__all__ = ["GitClient", "Runner"]
