"""Tests for repository discovery and slug resolution."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from repofleet.models import RepoDescriptor
from repofleet.repo import RepoLocator, is_git_repo
from tests._fixtures.repo_builder import RepoBuilder


def test_is_git_repo(tmp_path: Path) -> None:
    repo = tmp_path / "repo"
    repo.mkdir()
    assert not is_git_repo(repo)

    (repo / ".git").mkdir()
    assert is_git_repo(repo)


def test_git_file_marker_is_not_a_repo_root(tmp_path: Path) -> None:
    repo = tmp_path / "worktree"
    repo.mkdir()
    (repo / ".git").write_text("gitdir: ../elsewhere\n", encoding="utf-8")
    assert not is_git_repo(repo)


def test_discover_two_level_layout(repo_builder: RepoBuilder) -> None:
    repo_path = repo_builder.repo("org/repo", remote="git@github.com:org/repo.git")

    repos = RepoLocator(repo_builder.git()).discover([str(repo_builder.root)])

    assert repos == [RepoDescriptor(path=repo_path.resolve(), slug="org/repo")]


def test_discover_path_that_is_itself_a_repo(repo_builder: RepoBuilder) -> None:
    repo_path = repo_builder.repo("solo", remote="https://github.com/acme/solo.git")

    repos = RepoLocator(repo_builder.git()).discover([str(repo_path)])

    assert [repo.slug for repo in repos] == ["acme/solo"]
    assert repos[0].path == repo_path.resolve()


def test_discover_first_level_children(repo_builder: RepoBuilder) -> None:
    repo_builder.repo("alpha", remote="git@github.com:acme/alpha.git")
    repo_builder.repo("beta", remote="git@github.com:acme/beta.git")
    (repo_builder.root / "notes").mkdir()

    repos = RepoLocator(repo_builder.git()).discover([str(repo_builder.root)])

    assert sorted(repo.slug for repo in repos) == ["acme/alpha", "acme/beta"]


def test_discover_does_not_descend_past_two_levels(repo_builder: RepoBuilder) -> None:
    repo_builder.repo("a/b/deep", remote="git@github.com:acme/deep.git")

    repos = RepoLocator(repo_builder.git()).discover([str(repo_builder.root)])

    assert repos == []


def test_discover_does_not_scan_inside_repositories(repo_builder: RepoBuilder) -> None:
    repo_builder.repo("outer", remote="git@github.com:acme/outer.git")
    repo_builder.repo("outer/vendor/inner", remote="git@github.com:acme/inner.git")

    repos = RepoLocator(repo_builder.git()).discover([str(repo_builder.root)])

    assert [repo.slug for repo in repos] == ["acme/outer"]


def test_discover_excludes_unparsable_remote(
    repo_builder: RepoBuilder, caplog: pytest.LogCaptureFixture
) -> None:
    repo_builder.repo("good", remote="git@github.com:acme/good.git")
    bad = repo_builder.repo("bad", remote="file:///srv/git/bad")

    with caplog.at_level(logging.ERROR, logger="repofleet"):
        repos = RepoLocator(repo_builder.git()).discover([str(repo_builder.root)])

    assert [repo.slug for repo in repos] == ["acme/good"]
    errors = [record for record in caplog.records if record.levelno == logging.ERROR]
    assert len(errors) == 1
    assert str(bad) in errors[0].getMessage()
    assert "Failed to parse git URL" in errors[0].getMessage()


def test_discover_excludes_repo_without_origin(repo_builder: RepoBuilder) -> None:
    repo_builder.repo("no-remote")
    repo_builder.repo("with-remote", remote="git@github.com:acme/with-remote.git")

    repos = RepoLocator(repo_builder.git()).discover([str(repo_builder.root)])

    assert [repo.slug for repo in repos] == ["acme/with-remote"]


def test_discover_dedupes_by_slug_first_seen_wins(repo_builder: RepoBuilder) -> None:
    first = repo_builder.repo("a-clone", remote="git@github.com:acme/app.git")
    repo_builder.repo("b-clone", remote="https://github.com/acme/app")

    repos = RepoLocator(repo_builder.git()).discover([str(repo_builder.root)])

    assert repos == [RepoDescriptor(path=first.resolve(), slug="acme/app")]


def test_discover_smart_matching_filters_by_identifier(
    repo_builder: RepoBuilder, caplog: pytest.LogCaptureFixture
) -> None:
    repo_builder.repo("acme/alpha-service", remote="git@github.com:acme/alpha-service.git")
    repo_builder.repo("acme/beta", remote="git@github.com:acme/beta.git")
    repo_builder.repo("other/beta", remote="git@github.com:other/beta.git")

    with caplog.at_level(logging.WARNING, logger="repofleet"):
        repos = RepoLocator(repo_builder.git()).discover(
            [str(repo_builder.root), "alpha", "other/beta", "gamma"]
        )

    assert sorted(repo.slug for repo in repos) == ["acme/alpha-service", "other/beta"]
    warnings = [record.getMessage() for record in caplog.records if record.levelno == logging.WARNING]
    assert warnings == ["No repository matched 'gamma'"]


def test_discover_identifiers_only_scan_current_directory(
    repo_builder: RepoBuilder, monkeypatch: pytest.MonkeyPatch
) -> None:
    repo_builder.repo("alpha", remote="git@github.com:acme/alpha.git")
    repo_builder.repo("beta", remote="git@github.com:acme/beta.git")
    monkeypatch.chdir(repo_builder.root)

    repos = RepoLocator(repo_builder.git()).discover(["acme/beta"])

    assert [repo.slug for repo in repos] == ["acme/beta"]


def test_discover_empty_directory_is_empty_result(tmp_path: Path) -> None:
    def runner(args, cwd, timeout=None):  # type: ignore[no-untyped-def]
        raise AssertionError("git should not be invoked")

    from repofleet.git import GitClient

    assert RepoLocator(GitClient(runner=runner)).discover([str(tmp_path)]) == []
