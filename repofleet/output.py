"""Console rendering for ownership reports."""

from __future__ import annotations

import textwrap
from typing import Sequence

import yaml
from rich.console import Console
from rich.text import Text

from .models import CoverageStatus, RepoReport

_STATUS_STYLES = {
    CoverageStatus.OWNED: "bold green",
    CoverageStatus.PARTIAL: "bold yellow",
    CoverageStatus.UNOWNED: "bold red",
}

_STATUS_WIDTH = len(CoverageStatus.UNOWNED.value)


def status_text(status: CoverageStatus, *, width: int = 0) -> Text:
    return Text(status.value.rjust(width), style=_STATUS_STYLES.get(status, ""))


def render_summary(reports: Sequence[RepoReport], console: Console) -> None:
    """One ``status slug`` line per repository followed by a count."""
    for report in reports:
        line = status_text(report.status, width=_STATUS_WIDTH)
        line.append(f" {report.slug}")
        console.print(line, soft_wrap=True)
    console.print(f"count {len(reports)}", highlight=False)


def render_detailed(reports: Sequence[RepoReport], console: Console) -> None:
    """``status slug:`` headers with the record rendered as indented YAML."""
    for report in reports:
        header = status_text(report.status)
        header.append(f" {report.slug}:")
        console.print(header, soft_wrap=True)
        console.print(
            textwrap.indent(dump_record(report), "  ").rstrip("\n"),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
    console.print(f"Matched {len(reports)} repos", highlight=False)


def dump_record(report: RepoReport) -> str:
    return yaml.safe_dump(
        report.to_record(),
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )


__all__ = ["dump_record", "render_detailed", "render_summary", "status_text"]
