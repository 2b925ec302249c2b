"""Repository URL parsing."""

from __future__ import annotations

from urllib.parse import urlsplit

from pydantic import ValidationError

from compass.vcs.models import RepoRef


def parse_repo_url(url: str) -> RepoRef | None:
    """Extract owner/name from a repository URL.

    Returns None for anything without a scheme or with fewer than two
    path segments. The host is not checked, so ``file:///owner/repo``
    parses too. A trailing ``.git`` is ignored, as are segments after the
    second one (``/tree/main/src`` and the like).
    """
    try:
        parts = urlsplit(url.strip())
    except (AttributeError, ValueError):
        return None
    if not parts.scheme:
        return None

    path = parts.path.removesuffix(".git")
    segments = [s for s in path.split("/") if s]
    if len(segments) < 2:
        return None
    try:
        return RepoRef(owner=segments[0], name=segments[1])
    except ValidationError:
        return None
