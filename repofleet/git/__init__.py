"""Git subprocess access and remote URL parsing."""

from .client import GitClient, Runner
from .url import parse_git_url

__all__ = ["GitClient", "Runner", "parse_git_url"]
