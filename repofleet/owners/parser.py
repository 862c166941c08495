"""CODEOWNERS loading and classification."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List

from ..config import DEFAULT_CODEOWNERS_PATH
from ..errors import OwnershipReadError
from ..models import ROOT_PATTERN, Empty, Missing, OwnershipTable, Present

WILDCARD_PATTERN = "*"


class OwnershipParser:
    """Reads a repository's CODEOWNERS file into an ownership table."""

    def __init__(self, codeowners_path: str = DEFAULT_CODEOWNERS_PATH) -> None:
        self.codeowners_path = codeowners_path

    def load(self, repo_root: Path) -> OwnershipTable:
        """Classify the repository's CODEOWNERS as missing, empty or present.

        Raises ``OwnershipReadError`` when the file exists but cannot be read.
        """
        path = repo_root / self.codeowners_path
        if not path.exists():
            return Missing()
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise OwnershipReadError(f"Failed to read {path}: {exc}") from exc
        return parse_codeowners(content)


def parse_codeowners(content: str) -> OwnershipTable:
    """Parse CODEOWNERS text; a repeated pattern keeps its last owner list."""
    entries: Dict[str, List[str]] = {}
    for raw in content.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        parts = line.split()
        if len(parts) < 2:
            continue
        pattern = ROOT_PATTERN if parts[0] == WILDCARD_PATTERN else parts[0]
        entries[pattern] = [owner.lstrip("@") for owner in parts[1:]]
    if not entries:
        return Empty()
    return Present(entries=entries)


__all__ = ["OwnershipParser", "parse_codeowners"]
