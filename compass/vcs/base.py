"""Abstract repository source for Compass."""

from abc import ABC, abstractmethod

from compass.vcs.models import RepoRef


class RepoSource(ABC):
    """Upstream that supplies issue history and file listings.

    Payloads are returned as plain dicts so the summarizer can tolerate
    missing or oddly typed fields without failing a whole listing.
    """

    @abstractmethod
    async def list_issues(self, ref: RepoRef, limit: int = 100) -> list[dict]:
        """Most recent issues regardless of state.

        Each dict carries at least ``number``, ``state``, ``created_at``,
        ``title`` and ``body``.
        """
        ...

    @abstractmethod
    async def get_tree(self, ref: RepoRef, branch: str) -> list[dict]:
        """Recursive listing of ``branch`` as dicts with ``path`` and ``type``.

        ``type`` is ``"blob"`` for files and ``"tree"`` for directories.
        Raises if the branch does not exist.
        """
        ...
