"""Code file enumeration and prefix-based ownership coverage."""

from __future__ import annotations

import os
from pathlib import Path, PurePosixPath
from typing import Iterable, List, Mapping, Sequence, Set

from ..models import (
    ROOT_PATTERN,
    CoverageResult,
    CoverageStatus,
    Empty,
    Missing,
    OwnershipTable,
    Present,
)
from .mapping import build_mapping

CODE_FILENAMES = frozenset({"Dockerfile", "Makefile"})

CODE_EXTENSIONS = frozenset(
    {
        ".py",
        ".js",
        ".jsx",
        ".ts",
        ".tsx",
        ".css",
        ".html",
        ".tf",
        ".yaml",
        ".yml",
        ".toml",
        ".tpl",
    }
)

_EXCLUDED_DIRS = frozenset({".git", ".github"})


def is_code_file(path: str | os.PathLike[str]) -> bool:
    """Heuristic: treat certain filenames and extensions as code."""
    pure = PurePosixPath(os.fspath(path))
    if pure.name in CODE_FILENAMES:
        return True
    return pure.suffix.lower() in CODE_EXTENSIONS


def gather_code_files(root: Path) -> List[str]:
    """Return POSIX paths relative to ``root`` of every code file, sorted.

    ``.git`` and ``.github`` subtrees are skipped at every depth.
    """
    files: List[str] = []
    for current, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames[:] = sorted(name for name in dirnames if name not in _EXCLUDED_DIRS)
        base = Path(current)
        for name in filenames:
            path = base / name
            if not path.is_file() or not is_code_file(name):
                continue
            files.append(_lossy(path.relative_to(root).as_posix()))
    return sorted(files)


def bucket_for(rel_path: str) -> str:
    """Return ``/`` for root-level files, else ``/<first segment>/``."""
    segments = [segment for segment in rel_path.split("/") if segment]
    if len(segments) <= 1:
        return ROOT_PATTERN
    return f"/{segments[0]}/"


def is_covered(rel_path: str, patterns: Iterable[str]) -> bool:
    """A file is covered when any pattern is a string prefix of ``/<path>``."""
    anchored = f"/{rel_path}"
    return any(anchored.startswith(pattern) for pattern in patterns)


def determine_unowned(entries: Mapping[str, Sequence[str]], code_files: Iterable[str]) -> Set[str]:
    """Return the first-level buckets holding at least one uncovered file."""
    patterns = list(entries)
    return {bucket_for(path) for path in code_files if not is_covered(path, patterns)}


def compute_coverage(table: OwnershipTable, repo_root: Path) -> CoverageResult:
    """Derive the coverage status and presentation mapping for one repository."""
    if isinstance(table, (Missing, Empty)):
        return CoverageResult(status=CoverageStatus.UNOWNED, paths=table.marker)
    if not isinstance(table, Present):
        raise TypeError(f"Unsupported ownership table: {table!r}")
    unowned = determine_unowned(table.entries, gather_code_files(repo_root))
    status = CoverageStatus.PARTIAL if unowned else CoverageStatus.OWNED
    return CoverageResult(
        status=status,
        paths=build_mapping(table.entries, unowned),
    )


def _lossy(rel_path: str) -> str:
    # undecodable bytes in names become U+FFFD instead of lone surrogates
    return rel_path.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def _raise(exc: OSError) -> None:
    raise exc


__all__ = [
    "CODE_EXTENSIONS",
    "CODE_FILENAMES",
    "bucket_for",
    "compute_coverage",
    "determine_unowned",
    "gather_code_files",
    "is_code_file",
    "is_covered",
]
