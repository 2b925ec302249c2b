"""Issue validation: duplicate check of a proposed issue against repo history."""

from __future__ import annotations

import json
import logging
import re

from pydantic import ValidationError

from compass.drafter.models import (
    GenerationError,
    InputError,
    IssueRequest,
    ValidationReport,
)
from compass.drafter.prompts import build_issue_prompt
from compass.llm.base import LLMProvider
from compass.vcs.aggregator import ContextAggregator
from compass.vcs.refs import parse_repo_url

logger = logging.getLogger(__name__)

INVALID_REPO_MESSAGE = (
    "Invalid GitHub Repository Link. Format should be https://github.com/owner/repo"
)

_FENCE = re.compile(r"```(?:json)?")


class IssueValidator:
    """Checks a proposed issue for duplicates.

    Pipeline:
        repo link → RepoRef → EvidenceBundle → prompt → LLM → ValidationReport
    """

    def __init__(self, llm: LLMProvider, aggregator: ContextAggregator) -> None:
        self.llm = llm
        self.aggregator = aggregator

    async def validate(self, request: IssueRequest) -> ValidationReport:
        if not (request.repo_link and request.title and request.description):
            raise InputError(
                "Missing required fields: repoLink, title, or description"
            )
        ref = parse_repo_url(request.repo_link)
        if ref is None:
            raise InputError(INVALID_REPO_MESSAGE)

        evidence = await self.aggregator.gather(ref)
        system, user = build_issue_prompt(request, evidence)

        try:
            response = await self.llm.generate(
                system=system,
                user=user,
                max_tokens=self.llm.config.max_tokens,
                json_mode=True,
            )
        except Exception as e:
            logger.error("Issue validation generation failed for %s: %s", ref.full_name, e)
            raise GenerationError(f"Failed to validate issue. Please try again. {e}") from e

        return parse_report(response.content)


def strip_code_fences(text: str) -> str:
    """Remove Markdown code fences a model may wrap around JSON output."""
    return _FENCE.sub("", text).strip()


def parse_report(raw: str) -> ValidationReport:
    """Parse model output into a ValidationReport, raising GenerationError."""
    try:
        data = json.loads(strip_code_fences(raw))
        return ValidationReport.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as e:
        logger.error("Unparseable validation report: %s", e)
        raise GenerationError(f"Failed to validate issue. Please try again. {e}") from e
