"""Tests for code file discovery and coverage computation."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from repofleet.models import (
    EMPTY_CODEOWNERS,
    MISSING_CODEOWNERS,
    CoverageStatus,
    Empty,
    Missing,
    Present,
)
from repofleet.owners import compute_coverage, determine_unowned, gather_code_files, is_code_file
from repofleet.owners.coverage import bucket_for, is_covered
from tests._fixtures.repo_builder import RepoBuilder


@pytest.mark.parametrize(
    "name",
    ["test.py", "app.js", "view.JSX", "index.ts", "c.tsx", "s.css", "page.HTML", "main.tf",
     "ci.yaml", "ci.yml", "pyproject.toml", "chart.tpl", "Dockerfile", "Makefile", "deploy/Dockerfile"],
)
def test_is_code_file_accepts_allow_list(name: str) -> None:
    assert is_code_file(name)


@pytest.mark.parametrize("name", ["README.md", "notes.txt", "dockerfile", "Makefile.bak", "yaml", "LICENSE"])
def test_is_code_file_rejects_others(name: str) -> None:
    assert not is_code_file(name)


def test_gather_code_files_skips_git_and_github(repo_builder: RepoBuilder) -> None:
    repo = repo_builder.repo(
        "repo",
        files={
            "README.md": "# readme\n",
            "setup.py": "print('x')\n",
            "src/pkg/mod.py": "x = 1\n",
            "deploy/Dockerfile": "FROM scratch\n",
            ".github/workflows/ci.yml": "on: push\n",
            ".git/hooks/pre-commit.py": "pass\n",
            "web/.github/notes.yml": "a: 1\n",
        },
    )

    assert gather_code_files(repo) == ["deploy/Dockerfile", "setup.py", "src/pkg/mod.py"]


def test_bucket_for_root_and_nested_files() -> None:
    assert bucket_for("setup.py") == "/"
    assert bucket_for("src/main.py") == "/src/"
    assert bucket_for("src/pkg/deep/mod.py") == "/src/"


def test_is_covered_uses_string_prefix() -> None:
    assert is_covered("src/main.py", ["/src/"])
    assert is_covered("src/main.py", ["/"])
    assert is_covered("srcs/main.py", ["/src"])
    assert not is_covered("lib/main.py", ["/src/", "/docs/"])
    assert not is_covered("main.py", [])


def test_determine_unowned_reports_first_level_buckets() -> None:
    entries = {"/src/": ["alice"], "/tools/build/": ["bob"]}
    files = ["setup.py", "src/a.py", "tools/build/x.py", "tools/lint/y.py", "web/a/b/c.ts"]

    assert determine_unowned(entries, files) == {"/", "/tools/", "/web/"}


def test_determine_unowned_empty_when_root_owned() -> None:
    assert determine_unowned({"/": ["alice"]}, ["a.py", "x/y/z.py"]) == set()


def test_compute_coverage_scenario_owned(repo_builder: RepoBuilder) -> None:
    repo = repo_builder.repo(
        "repo",
        codeowners="* @alice\n/docs/ @bob",
        files={"README.md": "hi\n", "docs/x.md": "doc\n", "src/main.py": "x = 1\n"},
    )

    assert gather_code_files(repo) == ["src/main.py"]

    result = compute_coverage(Present(entries={"/": ["alice"], "/docs/": ["bob"]}), repo)

    assert result.status is CoverageStatus.OWNED
    assert result.paths == {"/": "alice", "/docs/": "bob"}


def test_compute_coverage_partial(repo_builder: RepoBuilder) -> None:
    repo = repo_builder.repo(
        "repo",
        files={"setup.py": "", "src/a.py": "", "lib/b.py": "", "docs/index.md": ""},
    )

    result = compute_coverage(Present(entries={"/src/": ["alice", "bob"]}), repo)

    assert result.status is CoverageStatus.PARTIAL
    assert list(result.paths) == ["/", "/lib/", "/src/"]
    assert result.paths == {"/": "UNOWNED", "/lib/": "UNOWNED", "/src/": ["alice", "bob"]}


def test_undecodable_directory_name_is_reported_with_replacement_character(
    repo_builder: RepoBuilder,
) -> None:
    if sys.getfilesystemencoding().lower() not in {"utf-8", "utf8"}:
        pytest.skip("requires a UTF-8 filesystem encoding")
    repo = repo_builder.repo("repo", files={"src/a.py": ""})
    raw_dir = os.path.join(os.fsencode(repo), b"caf\xe9")
    try:
        os.mkdir(raw_dir)
    except OSError:
        pytest.skip("filesystem rejects non-UTF-8 names")
    with open(os.path.join(raw_dir, b"main.py"), "wb"):
        pass

    assert gather_code_files(repo) == ["caf\ufffd/main.py", "src/a.py"]

    result = compute_coverage(Present(entries={"/src/": ["alice"]}), repo)

    assert result.status is CoverageStatus.PARTIAL
    assert result.paths == {"/caf\ufffd/": "UNOWNED", "/src/": "alice"}


def test_compute_coverage_status_matches_unowned_set(repo_builder: RepoBuilder) -> None:
    repo = repo_builder.repo("repo", files={"app/main.py": ""})

    for entries in ({"/app/": ["a"]}, {"/lib/": ["a"]}, {"/": ["a"]}):
        result = compute_coverage(Present(entries=entries), repo)
        unowned = determine_unowned(entries, gather_code_files(repo))
        assert (result.status is CoverageStatus.OWNED) == (not unowned)


def test_compute_coverage_missing_and_empty(tmp_path: Path) -> None:
    missing = compute_coverage(Missing(), tmp_path)
    empty = compute_coverage(Empty(), tmp_path)

    assert missing.status is CoverageStatus.UNOWNED
    assert missing.paths == MISSING_CODEOWNERS
    assert empty.status is CoverageStatus.UNOWNED
    assert empty.paths == EMPTY_CODEOWNERS
