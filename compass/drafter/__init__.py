"""Drafting workflows: issue validation and PR descriptions."""

from compass.drafter.issue_validator import IssueValidator
from compass.drafter.models import (
    GenerationError,
    InputError,
    IssueRequest,
    PRDescription,
    PRRequest,
    Section,
    ValidationReport,
)
from compass.drafter.pr_writer import PRWriter, load_requirements
from compass.drafter.sections import plan_sections, render_sections, resolve_toggles

__all__ = [
    "GenerationError",
    "InputError",
    "IssueRequest",
    "IssueValidator",
    "PRDescription",
    "PRRequest",
    "PRWriter",
    "Section",
    "ValidationReport",
    "load_requirements",
    "plan_sections",
    "render_sections",
    "resolve_toggles",
]
