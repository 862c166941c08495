"""Remote URL parsing into owner/name slugs."""

from __future__ import annotations

import re

from ..errors import SlugParseError

_URL_PATTERNS = (
    # ssh://git@host/owner/name.git, https://host/owner/name, git://host/owner/name
    re.compile(
        r"""
        ^(?:git|ssh|https?)://
        (?:[^@/]+@)?
        [^:/]+(?::\d+)?
        /(?P<slug>[^/]+/[^/]+?)
        (?:\.git)?/?$
        """,
        re.VERBOSE,
    ),
    # git@host:owner/name.git
    re.compile(
        r"""
        ^(?:[^@/]+@)?
        [^:/]+
        :(?P<slug>[^/]+/[^/]+?)
        (?:\.git)?/?$
        """,
        re.VERBOSE,
    ),
)


def parse_git_url(url: str) -> str:
    """Return the ``owner/name`` slug encoded in a Git remote URL."""
    candidate = url.strip()
    for pattern in _URL_PATTERNS:
        match = pattern.match(candidate)
        if match:
            return match.group("slug")
    raise SlugParseError(candidate)


__all__ = ["parse_git_url"]
