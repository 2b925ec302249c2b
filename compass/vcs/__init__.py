"""Repository context for Compass."""

import os

from compass.config.models import VCSConfig
from compass.vcs.aggregator import ContextAggregator
from compass.vcs.base import RepoSource
from compass.vcs.github import GitHubSource
from compass.vcs.models import EvidenceBundle, IssueRecord, RepoRef
from compass.vcs.refs import parse_repo_url


def create_source(config: VCSConfig) -> RepoSource:
    """Create a repository source from config.

    The token is read from the environment variable named in
    config.token_env and may be absent.
    """
    if config.provider != "github":
        raise ValueError(
            f"Unsupported VCS provider: {config.provider!r}. "
            "Currently only 'github' is supported."
        )
    return GitHubSource(token=os.environ.get(config.token_env) or None)


__all__ = [
    "ContextAggregator",
    "EvidenceBundle",
    "GitHubSource",
    "IssueRecord",
    "RepoRef",
    "RepoSource",
    "create_source",
    "parse_repo_url",
]
