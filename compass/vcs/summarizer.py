"""Reduces raw issue and tree payloads to bounded prompt text."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable

from compass.vcs.models import NO_DESCRIPTION, SNIPPET_LENGTH, UNKNOWN_STATE, IssueRecord

logger = logging.getLogger(__name__)

MAX_TREE_ENTRIES = 100


def to_issue_record(raw: dict[str, Any]) -> IssueRecord:
    """Build an IssueRecord from an upstream issue payload."""
    body = raw.get("body") or ""
    snippet = body[:SNIPPET_LENGTH].replace("\n", " ") if body else NO_DESCRIPTION
    return IssueRecord(
        number=int(raw.get("number") or 0),
        state=str(raw.get("state") or UNKNOWN_STATE),
        created_at=_format_date(raw.get("created_at")),
        title=str(raw.get("title") or ""),
        body_snippet=snippet,
    )


def format_issue(record: IssueRecord) -> str:
    return (
        f"- #{record.number} [{record.state}] (Created: {record.created_at}) {record.title}\n"
        f"  Snippet: {record.body_snippet}..."
    )


def summarize_issues(raw_issues: Iterable[Any]) -> str:
    """One two-line entry per issue. Entries that cannot be read are skipped."""
    lines: list[str] = []
    for raw in raw_issues:
        try:
            lines.append(format_issue(to_issue_record(raw)))
        except (AttributeError, TypeError, ValueError):
            logger.debug("Skipping malformed issue payload: %r", raw)
    return "\n".join(lines)


def summarize_tree(raw_entries: Iterable[Any]) -> str:
    """Newline-joined paths of the first MAX_TREE_ENTRIES files, upstream order."""
    paths: list[str] = []
    for entry in raw_entries:
        if len(paths) >= MAX_TREE_ENTRIES:
            break
        if not isinstance(entry, dict) or entry.get("type") != "blob":
            continue
        path = entry.get("path")
        if path:
            paths.append(str(path))
    return "\n".join(paths)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _format_date(value: Any) -> str:
    """Render datetimes and ISO timestamps as YYYY-MM-DD."""
    if value is None:
        return ""
    if isinstance(value, date):
        return value.isoformat()[:10]
    return str(value).split("T")[0]
