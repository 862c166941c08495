"""Configuration loading for repofleet (~/.config/repofleet/config.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional

import yaml

from .errors import ConfigError
from .logging import get_logger

DEFAULT_CONFIG_PATH = Path("~/.config/repofleet/config.yml")
DEFAULT_EX_EMPLOYEES_DIR = Path("~/.config/ls-owners")
DEFAULT_CODEOWNERS_PATH = ".github/CODEOWNERS"
DEFAULT_TOP_AUTHORS = 5
EX_EMPLOYEES_FILENAME = "ex-employees"

logger = get_logger("config")


@dataclass
class FleetConfig:
    """Settings shared by every repofleet command."""

    workers: Optional[int] = None
    git_timeout: Optional[float] = None
    top_authors: int = DEFAULT_TOP_AUTHORS
    codeowners_path: str = DEFAULT_CODEOWNERS_PATH
    ex_employees_dir: Optional[Path] = None
    ex_employees: Dict[str, List[str]] = field(default_factory=dict)


class ExclusionLookup:
    """Maps an organisation to the author names hidden from contributor reports.

    Built once at startup from ``<directory>/<org>/ex-employees`` files plus any
    inline names from the config file, then shared read-only across workers.
    """

    def __init__(self, names_by_org: Mapping[str, Iterable[str]] | None = None) -> None:
        self._names: Dict[str, FrozenSet[str]] = {
            org: frozenset(names) for org, names in (names_by_org or {}).items()
        }

    @classmethod
    def from_config(cls, config: FleetConfig) -> "ExclusionLookup":
        merged: Dict[str, set[str]] = {}
        directory = config.ex_employees_dir
        if directory is None:
            directory = DEFAULT_EX_EMPLOYEES_DIR
        directory = directory.expanduser()
        for org_dir in _org_dirs(directory):
            names_file = org_dir / EX_EMPLOYEES_FILENAME
            if not names_file.is_file():
                continue
            merged.setdefault(org_dir.name, set()).update(read_names(names_file))
        for org, names in config.ex_employees.items():
            merged.setdefault(org, set()).update(names)
        return cls(merged)

    def __call__(self, org: str) -> FrozenSet[str]:
        return self._names.get(org, frozenset())


def read_names(path: Path) -> List[str]:
    """Read one name per line, ignoring blanks."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Unable to read %s: %s", path, exc)
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


def load_config(config_path: Path | None = None) -> FleetConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    explicit = config_path is not None
    path = (config_path or DEFAULT_CONFIG_PATH).expanduser()

    if not path.exists():
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        return FleetConfig()

    data = _read_config(path)
    if not isinstance(data, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")

    config = FleetConfig()
    config.workers = _as_positive_int(data.get("workers"), "workers")
    config.git_timeout = _as_positive_float(data.get("git_timeout"), "git_timeout")
    top_authors = data.get("top_authors")
    if top_authors is not None:
        if not isinstance(top_authors, int) or isinstance(top_authors, bool) or top_authors < 0:
            raise ConfigError("top_authors must be a non-negative integer")
        config.top_authors = top_authors
    codeowners_path = data.get("codeowners_path")
    if codeowners_path is not None:
        config.codeowners_path = str(codeowners_path)
    ex_dir = data.get("ex_employees_dir")
    if ex_dir is not None:
        ex_path = Path(str(ex_dir).strip()).expanduser()
        # relative directories resolve against the config file location
        config.ex_employees_dir = ex_path if ex_path.is_absolute() else path.parent / ex_path
    config.ex_employees = _as_names_mapping(data.get("ex_employees"))
    return config


def _org_dirs(directory: Path) -> List[Path]:
    if not directory.is_dir():
        return []
    try:
        return sorted(directory.iterdir())
    except OSError as exc:
        logger.warning("Unable to list %s: %s", directory, exc)
        return []


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_positive_int(value: Any, key: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f"{key} must be a positive integer")
    return value


def _as_positive_float(value: Any, key: str) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError(f"{key} must be a positive number")
    return float(value)


def _as_names_mapping(value: Any) -> Dict[str, List[str]]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError("ex_employees must map organisations to lists of names")
    result: Dict[str, List[str]] = {}
    for org, names in value.items():
        if isinstance(names, str):
            names = [names]
        if not isinstance(names, list):
            raise ConfigError(f"ex_employees.{org} must be a list of names")
        result[str(org)] = [str(name).strip() for name in names if str(name).strip()]
    return result


__all__ = [
    "ExclusionLookup",
    "FleetConfig",
    "load_config",
    "read_names",
]
