"""PR description drafting."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from compass.drafter.models import GenerationError, InputError, PRDescription, PRRequest
from compass.drafter.prompts import DEFAULT_REQUIREMENTS, build_pr_prompt
from compass.drafter.sections import plan_sections, render_sections
from compass.llm.base import LLMProvider

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_NAME = "pr-description.md"


class PRWriter:
    """Generates a PR description whose sections follow the toggle plan."""

    def __init__(self, llm: LLMProvider) -> None:
        self.llm = llm

    async def generate(self, request: PRRequest) -> PRDescription:
        if not request.pr_link and not (request.problem and request.changes):
            raise InputError(
                "Missing required fields (either prLink or both problem and changes)"
            )

        plan = plan_sections(request.structure, reference_link=request.pr_link or None)
        system, user = build_pr_prompt(request, render_sections(plan))

        try:
            response = await self.llm.generate(
                system=system, user=user, max_tokens=self.llm.config.max_tokens
            )
        except Exception as e:
            logger.error("PR description generation failed: %s", e)
            raise GenerationError(
                "Failed to generate PR description. Please check your API key "
                f"and try again. {e}"
            ) from e

        return PRDescription(markdown=response.content, sections=plan, model=response.model)


def load_requirements(path: str | Path | None) -> str:
    """Read project PR guidelines from a JSON file with a "requirements" key.

    Missing or unreadable files fall back to DEFAULT_REQUIREMENTS.
    """
    if path is None:
        return DEFAULT_REQUIREMENTS
    try:
        data = json.loads(Path(path).read_text())
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not load PR config %s, using defaults: %s", path, e)
        return DEFAULT_REQUIREMENTS
    requirements = data.get("requirements") if isinstance(data, dict) else None
    return requirements or DEFAULT_REQUIREMENTS
