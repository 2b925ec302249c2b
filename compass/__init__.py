"""Open Source Compass - issue validation and PR description drafting for contributors."""

from compass.config import CompassConfig, load_config
from compass.drafter import IssueValidator, PRWriter, plan_sections
from compass.editor import EditBuffer, FormatAction, apply_format
from compass.llm import LLMProvider, create_llm_provider
from compass.vcs import ContextAggregator, GitHubSource, RepoRef, parse_repo_url

__version__ = "0.1.0"

__all__ = [
    "CompassConfig",
    "ContextAggregator",
    "EditBuffer",
    "FormatAction",
    "GitHubSource",
    "IssueValidator",
    "LLMProvider",
    "PRWriter",
    "RepoRef",
    "apply_format",
    "create_llm_provider",
    "load_config",
    "parse_repo_url",
    "plan_sections",
]
