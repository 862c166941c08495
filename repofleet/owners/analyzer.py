"""Per-repository ownership analysis combining parser, coverage and authors."""

from __future__ import annotations

from typing import AbstractSet, Iterable, List, Optional

from ..logging import get_logger
from ..models import CoverageStatus, RepoDescriptor, RepoReport
from .authors import AuthorReporter
from .coverage import compute_coverage
from .parser import OwnershipParser


class OwnershipAnalyzer:
    """Builds a ``RepoReport`` for one repository.

    Returns ``None`` when the repository's status is excluded by ``only``.
    """

    def __init__(
        self,
        parser: OwnershipParser | None = None,
        authors: AuthorReporter | None = None,
        *,
        only: Optional[AbstractSet[CoverageStatus]] = None,
    ) -> None:
        self.parser = parser or OwnershipParser()
        self.authors = authors
        self.only = frozenset(only) if only else None
        self.logger = get_logger("owners")

    def analyze(self, repo: RepoDescriptor) -> Optional[RepoReport]:
        self.logger.debug("Analyzing %s (%s)", repo.slug, repo.path)
        table = self.parser.load(repo.path)
        coverage = compute_coverage(table, repo.path)

        if self.only is not None and coverage.status not in self.only:
            self.logger.debug("Skipping %s with status %s", repo.slug, coverage.status.value)
            return None

        report = RepoReport(slug=repo.slug, status=coverage.status, paths=coverage.paths)
        if self.authors is not None and coverage.status is not CoverageStatus.OWNED:
            report.authors = self.authors.top_authors(repo)
        return report


def sort_reports(reports: Iterable[RepoReport]) -> List[RepoReport]:
    """Order by status rank (unowned, partial, owned), then slug."""
    return sorted(reports, key=lambda report: (report.status.rank, report.slug))


def exit_code(reports: Iterable[RepoReport]) -> int:
    return 1 if any(report.status is not CoverageStatus.OWNED for report in reports) else 0


__all__ = ["OwnershipAnalyzer", "exit_code", "sort_reports"]
