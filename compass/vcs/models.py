"""Pydantic models for repository context."""

from pydantic import BaseModel, ConfigDict, Field

SNIPPET_LENGTH = 200
NO_DESCRIPTION = "No description"
UNKNOWN_STATE = "unknown"


class RepoRef(BaseModel):
    """An owner/name pair identifying a hosted repository."""

    model_config = ConfigDict(frozen=True)

    owner: str = Field(min_length=1)
    name: str = Field(min_length=1)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


class IssueRecord(BaseModel):
    """One existing issue, reduced to what the validation prompt needs."""

    number: int
    state: str = Field(default=UNKNOWN_STATE, description="upstream state, usually open or closed")
    created_at: str = Field(default="", description="YYYY-MM-DD, empty when unknown")
    title: str = ""
    body_snippet: str = Field(default=NO_DESCRIPTION, max_length=SNIPPET_LENGTH)


class EvidenceBundle(BaseModel):
    """Issue and file tree summaries handed to the issue validation prompt.

    Each field holds either real summarized data or a placeholder that
    names why the data is missing.
    """

    issues_summary: str
    tree_summary: str
