"""Repository discovery for finding Git work trees under a set of paths."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Tuple

from ..errors import RepofleetError
from ..git import GitClient
from ..logging import get_logger
from ..models import RepoDescriptor


class RepoLocator:
    """Finds repositories with a bounded two-level scan and resolves their slugs.

    - A path that itself holds a ``.git`` directory is a repository root.
    - Otherwise its immediate children are checked for ``.git``.
    - Children that are plain directories have their own children checked too,
      which picks up ``org/<repo>`` layouts.

    Arguments that are not existing directories are treated as identifiers:
    discovered repositories are then narrowed to those whose slug equals or
    contains one of them.
    """

    def __init__(self, git: GitClient | None = None) -> None:
        self.git = git or GitClient()
        self.logger = get_logger("discovery")

    def discover(self, paths: Sequence[str]) -> List[RepoDescriptor]:
        directories, identifiers = self.split_arguments(paths)
        if identifiers and not directories:
            directories = [Path(".")]

        repos = self._dedupe(self._resolve_all(self.find_repo_paths(directories)))
        if identifiers:
            repos = self._match_identifiers(repos, identifiers)
        return repos

    @staticmethod
    def split_arguments(paths: Sequence[str]) -> Tuple[List[Path], List[str]]:
        directories: List[Path] = []
        identifiers: List[str] = []
        for raw in paths:
            candidate = Path(raw).expanduser()
            if candidate.is_dir():
                directories.append(candidate)
            else:
                identifiers.append(raw)
        return directories, identifiers

    def find_repo_paths(self, paths: Iterable[Path]) -> List[Path]:
        found: List[Path] = []
        for path in paths:
            if is_git_repo(path):
                found.append(path)
                continue
            if not path.is_dir():
                self.logger.error("%s: not a directory", path)
                continue
            for child in self._children(path):
                if is_git_repo(child):
                    found.append(child)
                    continue
                for grandchild in self._children(child):
                    if is_git_repo(grandchild):
                        found.append(grandchild)
        return found

    def resolve(self, path: Path) -> RepoDescriptor:
        root = self.git.toplevel(path)
        return RepoDescriptor(path=root, slug=self.git.slug(root))

    def _resolve_all(self, paths: Iterable[Path]) -> List[RepoDescriptor]:
        repos: List[RepoDescriptor] = []
        for path in paths:
            try:
                repos.append(self.resolve(path))
            except RepofleetError as exc:
                self.logger.error("%s: %s", path, exc)
        return repos

    def _dedupe(self, repos: Iterable[RepoDescriptor]) -> List[RepoDescriptor]:
        unique: Dict[str, RepoDescriptor] = {}
        for repo in repos:
            if repo.slug in unique:
                self.logger.debug(
                    "Skipping %s; %s already seen at %s", repo.path, repo.slug, unique[repo.slug].path
                )
                continue
            unique[repo.slug] = repo
        return list(unique.values())

    def _match_identifiers(
        self, repos: Sequence[RepoDescriptor], identifiers: Sequence[str]
    ) -> List[RepoDescriptor]:
        matched: List[RepoDescriptor] = []
        used = set()
        for repo in repos:
            hits = [ident for ident in identifiers if ident == repo.slug or ident in repo.slug]
            if hits:
                matched.append(repo)
                used.update(hits)
        for ident in identifiers:
            if ident not in used:
                self.logger.warning("No repository matched '%s'", ident)
        return matched

    def _children(self, path: Path) -> List[Path]:
        try:
            return sorted(child for child in path.iterdir() if child.is_dir())
        except OSError as exc:
            self.logger.error("%s: %s", path, exc)
            return []


def is_git_repo(path: Path) -> bool:
    """Return True when ``path`` holds a ``.git`` directory."""
    return (path / ".git").is_dir()


__all__ = ["RepoLocator", "is_git_repo"]
