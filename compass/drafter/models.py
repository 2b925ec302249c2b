"""Pydantic models and errors for the drafting workflows."""

from __future__ import annotations

from typing import Any, Literal, Mapping

from pydantic import BaseModel, Field

from compass.config.models import SectionToggles


class InputError(ValueError):
    """A request is missing fields or names an unusable repository."""


class GenerationError(Exception):
    """The language model call failed or returned something unusable."""


class IssueRequest(BaseModel):
    repo_link: str = ""
    title: str = ""
    description: str = ""


class RelatedIssue(BaseModel):
    number: int
    title: str = ""
    status: str = ""
    date: str = ""
    relevance: str = ""


class ValidationReport(BaseModel):
    """Structured verdict returned by the model for a proposed issue."""

    status: Literal["Unique", "Duplicate", "Potential Duplicate"]
    headline: str = "Issue Validation Report"
    uniqueness_feedback: str = ""
    related_issues: list[RelatedIssue] = Field(default_factory=list)
    project_context_feedback: str = ""


class PRRequest(BaseModel):
    pr_link: str = ""
    problem: str = ""
    changes: str = ""
    testing: str = ""
    limitations: str = ""
    project_requirements: str | None = None
    structure: SectionToggles | Mapping[str, Any] | None = None


class Section(BaseModel):
    """One heading the generated PR description must contain."""

    key: str
    title: str
    emoji: str
    guidance: str | None = None


class PRDescription(BaseModel):
    markdown: str
    sections: list[Section]
    model: str
