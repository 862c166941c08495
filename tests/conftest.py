from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.repo_builder import RepoBuilder


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Provide a reusable repo builder rooted at the pytest tmp_path."""
    return RepoBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _propagate_repofleet_logs() -> Iterator[None]:
    """Let caplog see repofleet records even after the CLI configured logging."""
    logger = logging.getLogger("repofleet")
    saved = (logger.propagate, list(logger.handlers), logger.level)
    logger.propagate = True
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    yield
    logger.propagate, handlers, level = saved
    logger.handlers[:] = handlers
    logger.setLevel(level)


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home
