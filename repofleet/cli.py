"""CLI entrypoints for repofleet commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

from rich.console import Console

from .config import ExclusionLookup, FleetConfig, load_config
from .errors import ConfigError, RepofleetError
from .git import GitClient
from .logging import configure_logging, get_logger
from .models import CoverageStatus, RepoReport
from .output import render_detailed, render_summary
from .owners import AuthorReporter, OwnershipAnalyzer, OwnershipParser, exit_code, sort_reports
from .parallel import ParallelExecutor
from .repo import RepoLocator

_STATUS_CHOICES = [status.value for status in CoverageStatus]


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def _add_paths_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "paths",
        nargs="*",
        default=["."],
        metavar="PATH",
        help=(
            "Directories to scan for repositories (defaults to current directory). "
            "Arguments that are not directories filter results by slug."
        ),
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repofleet",
        description="Audit fleets of local Git repositories.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a config file (defaults to ~/.config/repofleet/config.yml).",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        metavar="PATH",
        help="Also append log records (including per-repository failures) to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    owners_parser = subparsers.add_parser(
        "owners",
        help="List CODEOWNERS and detect un-owned code paths.",
    )
    _add_verbose_option(owners_parser, suppress_default=True)
    owners_parser.add_argument(
        "-o",
        "--only",
        nargs="+",
        choices=_STATUS_CHOICES,
        type=str.lower,
        default=[],
        metavar="FILTER",
        help="Only show repositories with these statuses: owned, unowned, partial.",
    )
    owners_parser.add_argument(
        "-d",
        "--detailed",
        action="store_true",
        help="Show detailed output (full YAML-style listing).",
    )
    owners_parser.add_argument(
        "--workers",
        type=_positive_int,
        default=None,
        help="Number of repositories to analyze concurrently.",
    )
    owners_parser.add_argument(
        "--git-timeout",
        type=float,
        default=None,
        help="Seconds before a git command is abandoned for that repository.",
    )
    owners_parser.add_argument(
        "--no-authors",
        action="store_true",
        help="Skip the top-contributor listing for repositories that are not fully owned.",
    )
    _add_paths_argument(owners_parser)

    repos_parser = subparsers.add_parser(
        "repos",
        help="List discovered repositories with their owner/name slug.",
    )
    _add_verbose_option(repos_parser, suppress_default=True)
    _add_paths_argument(repos_parser)

    slug_parser = subparsers.add_parser(
        "slug",
        help="Print the owner/name slug of the repository containing a directory.",
    )
    _add_verbose_option(slug_parser, suppress_default=True)
    slug_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory inside the repository (defaults to current directory).",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for repofleet commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        configure_logging(verbose=bool(args.verbose), log_file=args.log_file)
    except OSError as exc:
        parser.exit(2, f"Unable to open log file: {exc}\n")

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        parser.exit(2, f"{exc}\n")

    if args.command == "owners":
        reports = run_owners(args, config)
        console = Console(highlight=False)
        if args.detailed:
            render_detailed(reports, console)
        else:
            render_summary(reports, console)
        return exit_code(reports)
    if args.command == "repos":
        locator = RepoLocator(GitClient(timeout=config.git_timeout))
        for repo in sorted(locator.discover(args.paths), key=lambda repo: repo.slug):
            print(f"{repo.slug}\t{repo.path}")
        return 0
    if args.command == "slug":
        git = GitClient(timeout=config.git_timeout)
        try:
            slug = git.slug(git.toplevel(Path(args.directory).expanduser()))
        except RepofleetError as exc:
            parser.exit(1, f"{exc}\n")
        print(slug)
        return 0
    parser.exit(1, "Unknown command\n")  # pragma: no cover - argparse enforces choices


def run_owners(args: argparse.Namespace, config: FleetConfig) -> List[RepoReport]:
    """Discover repositories and analyze their ownership in parallel."""
    logger = get_logger("cli")
    timeout = args.git_timeout if args.git_timeout is not None else config.git_timeout
    git = GitClient(timeout=timeout)

    repos = RepoLocator(git).discover(args.paths)
    logger.debug("Discovered %d repositories", len(repos))

    authors = None
    if not args.no_authors:
        authors = AuthorReporter(
            git,
            exclusions=ExclusionLookup.from_config(config),
            limit=config.top_authors,
        )
    analyzer = OwnershipAnalyzer(
        OwnershipParser(config.codeowners_path),
        authors,
        only={CoverageStatus(value) for value in args.only},
    )

    executor = ParallelExecutor(repos, max_workers=args.workers or config.workers)
    return sort_reports(executor.execute(analyzer.analyze))


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
