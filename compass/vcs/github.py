"""GitHub repository source using PyGithub."""

import asyncio
import os
from functools import cached_property
from itertools import islice

from github import Auth, Github
from github.Repository import Repository

from compass.vcs.base import RepoSource
from compass.vcs.models import RepoRef


class GitHubSource(RepoSource):
    """GitHub implementation of RepoSource using PyGithub.

    PyGithub is synchronous, so all blocking calls are wrapped
    with asyncio.to_thread() to avoid blocking the event loop.
    Public repositories work without a token, at a lower rate limit.
    """

    def __init__(self, token: str | None = None):
        self._token = token or os.environ.get("GITHUB_TOKEN", "")

    @cached_property
    def _client(self) -> Github:
        if not self._token:
            return Github()
        return Github(auth=Auth.Token(self._token))

    def _get_repo(self, ref: RepoRef) -> Repository:
        return self._client.get_repo(ref.full_name)

    async def list_issues(self, ref: RepoRef, limit: int = 100) -> list[dict]:
        """Fetch up to ``limit`` recent issues, open and closed."""

        def _sync() -> list[dict]:
            repo = self._get_repo(ref)
            issues = repo.get_issues(state="all", sort="created", direction="desc")
            return [
                {
                    "number": issue.number,
                    "state": issue.state,
                    "created_at": issue.created_at,
                    "title": issue.title,
                    "body": issue.body,
                }
                for issue in islice(issues, limit)
            ]

        return await asyncio.to_thread(_sync)

    async def get_tree(self, ref: RepoRef, branch: str) -> list[dict]:
        """Fetch the recursive git tree of ``branch``."""

        def _sync() -> list[dict]:
            repo = self._get_repo(ref)
            tree = repo.get_git_tree(branch, recursive=True)
            return [{"path": e.path, "type": e.type} for e in tree.tree]

        return await asyncio.to_thread(_sync)
