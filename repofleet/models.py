"""Core data models shared across repofleet components."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Union

UNOWNED_MARKER = "UNOWNED"
MISSING_CODEOWNERS = "MISSING_CODEOWNERS"
EMPTY_CODEOWNERS = "EMPTY_CODEOWNERS"
ROOT_PATTERN = "/"


@dataclass(frozen=True)
class RepoDescriptor:
    """A discovered repository root and its canonical owner/name slug."""

    path: Path
    slug: str

    @property
    def org(self) -> str:
        return self.slug.split("/", 1)[0] or "unknown"


class CoverageStatus(str, Enum):
    """Ownership classification of a single repository."""

    UNOWNED = "unowned"
    PARTIAL = "partial"
    OWNED = "owned"

    @property
    def rank(self) -> int:
        return _STATUS_RANK[self]


_STATUS_RANK = {
    CoverageStatus.UNOWNED: 0,
    CoverageStatus.PARTIAL: 1,
    CoverageStatus.OWNED: 2,
}


@dataclass(frozen=True)
class Missing:
    """No CODEOWNERS file exists in the repository."""

    marker: str = MISSING_CODEOWNERS


@dataclass(frozen=True)
class Empty:
    """A CODEOWNERS file exists but contributes no entries."""

    marker: str = EMPTY_CODEOWNERS


@dataclass(frozen=True)
class Present:
    """Parsed CODEOWNERS entries keyed by path pattern."""

    entries: Dict[str, List[str]]


OwnershipTable = Union[Missing, Empty, Present]

OwnerValue = Union[str, List[str]]


@dataclass
class CoverageResult:
    """Coverage status plus the presentation mapping (or a missing/empty marker)."""

    status: CoverageStatus
    paths: Union[str, Dict[str, OwnerValue]]


@dataclass
class RepoReport:
    """Per-repository record handed to the output layer."""

    slug: str
    status: CoverageStatus
    paths: Union[str, Dict[str, OwnerValue]]
    authors: Optional[List[str]] = None

    def to_record(self) -> Dict[str, object]:
        record: Dict[str, object] = {"paths": self.paths}
        if self.authors is not None:
            record["authors"] = list(self.authors)
        return record


__all__ = [
    "CoverageResult",
    "CoverageStatus",
    "EMPTY_CODEOWNERS",
    "Empty",
    "MISSING_CODEOWNERS",
    "Missing",
    "OwnerValue",
    "OwnershipTable",
    "Present",
    "ROOT_PATTERN",
    "RepoDescriptor",
    "RepoReport",
    "UNOWNED_MARKER",
]
