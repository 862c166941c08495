"""CODEOWNERS parsing, coverage analysis and reporting."""

from .analyzer import OwnershipAnalyzer, exit_code, sort_reports
from .authors import AuthorReporter, parse_shortlog
from .coverage import compute_coverage, determine_unowned, gather_code_files, is_code_file
from .mapping import build_mapping, mapping_sort_key
from .parser import OwnershipParser, parse_codeowners

__all__ = [
    "AuthorReporter",
    "OwnershipAnalyzer",
    "OwnershipParser",
    "build_mapping",
    "compute_coverage",
    "determine_unowned",
    "exit_code",
    "gather_code_files",
    "is_code_file",
    "mapping_sort_key",
    "parse_codeowners",
    "parse_shortlog",
    "sort_reports",
]
