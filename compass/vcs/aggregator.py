"""Context aggregator: issue history + file tree for issue validation."""

from __future__ import annotations

import asyncio
import logging

from compass.config.models import VCSConfig
from compass.vcs.base import RepoSource
from compass.vcs.models import EvidenceBundle, RepoRef
from compass.vcs.summarizer import summarize_issues, summarize_tree

logger = logging.getLogger(__name__)

ISSUES_UNAVAILABLE = "Could not fetch existing issues."
TREE_UNAVAILABLE = "Could not fetch project files."
TREE_FETCH_FAILED = (
    "Could not fetch file tree (repo might be empty or too large/private)."
)
ISSUES_FETCH_FAILED_PREFIX = "Error fetching issues: "
NO_ISSUES = "No existing issues found."
NO_FILES = "No files found in the repository tree."


class ContextAggregator:
    """Builds an EvidenceBundle from a RepoSource, tolerating upstream failure.

    The issue and tree requests run concurrently and are settled
    independently. A failed tree request is retried once, afterwards,
    against the fallback branch. gather() never raises for upstream errors.
    """

    def __init__(self, source: RepoSource, config: VCSConfig | None = None) -> None:
        self.source = source
        self.config = config or VCSConfig()

    async def gather(self, ref: RepoRef) -> EvidenceBundle:
        issues_summary = ISSUES_UNAVAILABLE
        tree_summary = TREE_UNAVAILABLE
        try:
            issues_result, tree_result = await asyncio.gather(
                self.source.list_issues(ref, limit=self.config.issue_limit),
                self.source.get_tree(ref, self.config.primary_branch),
                return_exceptions=True,
            )
            issues_summary = self._issues_text(ref, issues_result)
            if isinstance(tree_result, BaseException):
                tree_summary = await self._fallback_tree(ref, tree_result)
            else:
                tree_summary = summarize_tree(tree_result) or NO_FILES
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error("Context aggregation failed for %s: %s", ref.full_name, e)
        return EvidenceBundle(issues_summary=issues_summary, tree_summary=tree_summary)

    def _issues_text(self, ref: RepoRef, result: object) -> str:
        if isinstance(result, BaseException):
            logger.warning("Issue fetch failed for %s: %s", ref.full_name, result)
            return ISSUES_FETCH_FAILED_PREFIX + str(result)
        return summarize_issues(result) or NO_ISSUES

    async def _fallback_tree(self, ref: RepoRef, error: BaseException) -> str:
        primary, fallback = self.config.primary_branch, self.config.fallback_branch
        logger.info(
            "Tree fetch for %s@%s failed (%s); trying %s",
            ref.full_name, primary, error, fallback,
        )
        try:
            entries = await self.source.get_tree(ref, fallback)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning("Tree fetch for %s@%s failed: %s", ref.full_name, fallback, e)
            return TREE_FETCH_FAILED
        return summarize_tree(entries) or NO_FILES
