from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class LLMSettings(BaseModel):
    provider: Literal["google", "anthropic", "openai"] = "google"
    model: str = "gemini-2.5-flash"
    api_key_env: str = "GEMINI_API_KEY"
    max_tokens: int = 4096


class VCSConfig(BaseModel):
    provider: Literal["github"] = "github"
    token_env: str = "GITHUB_TOKEN"
    primary_branch: str = "main"
    fallback_branch: str = "master"
    issue_limit: int = Field(default=100, ge=1, le=100)


class SectionToggles(BaseModel):
    """Optional PR description sections. Every section is on unless switched off."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    summary: bool = Field(default=True, alias="includeSummary")
    checklist: bool = Field(default=True, alias="includeChecklist")
    breaking_changes: bool = Field(default=True, alias="includeBreakingChanges")
    screenshots: bool = Field(default=True, alias="includeScreenshots")
    linked_issues: bool = Field(default=True, alias="includeLinkedIssues")


class PRConfig(BaseModel):
    requirements: str | None = None
    requirements_file: str | None = None
    sections: SectionToggles = Field(default_factory=SectionToggles)


class CompassConfig(BaseModel):
    llm: LLMSettings = Field(default_factory=LLMSettings)
    vcs: VCSConfig = Field(default_factory=VCSConfig)
    pr: PRConfig = Field(default_factory=PRConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
