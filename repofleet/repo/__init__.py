"""Repository discovery."""

from .discovery import RepoLocator, is_git_repo

__all__ = ["RepoLocator", "is_git_repo"]
