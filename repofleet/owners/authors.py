"""Top contributor reporting from ``git shortlog``."""

from __future__ import annotations

from typing import Callable, FrozenSet, List

from ..config import DEFAULT_TOP_AUTHORS
from ..errors import GitCommandError
from ..git import GitClient
from ..logging import get_logger
from ..models import RepoDescriptor

ExclusionFn = Callable[[str], FrozenSet[str]]


class AuthorReporter:
    """Lists the most active committers of a repository, minus excluded names."""

    def __init__(
        self,
        git: GitClient | None = None,
        *,
        exclusions: ExclusionFn | None = None,
        limit: int = DEFAULT_TOP_AUTHORS,
    ) -> None:
        self.git = git or GitClient()
        self._exclusions = exclusions or (lambda org: frozenset())
        self.limit = limit
        self.logger = get_logger("authors")

    def top_authors(self, repo: RepoDescriptor) -> List[str]:
        if self.limit == 0:
            return []
        try:
            output = self.git.shortlog(repo.path)
        except GitCommandError as exc:
            self.logger.debug("%s: shortlog unavailable: %s", repo.slug, exc)
            return []
        return parse_shortlog(output, exclude=self._exclusions(repo.org), limit=self.limit)


def parse_shortlog(output: str, *, exclude: FrozenSet[str] = frozenset(), limit: int) -> List[str]:
    """Turn ``<count>\\t<name>`` lines into ``"name (count)"`` strings."""
    authors: List[str] = []
    for line in output.splitlines():
        parts = line.split()
        if len(parts) < 2:
            continue
        count, name = parts[0], " ".join(parts[1:])
        if name in exclude:
            continue
        authors.append(f"{name} ({count})")
        if len(authors) == limit:
            break
    return authors


__all__ = ["AuthorReporter", "parse_shortlog"]
