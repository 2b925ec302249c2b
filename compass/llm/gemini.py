"""Google Gemini adapter for Compass."""

from __future__ import annotations

from typing import Any

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from compass.llm.base import LLMProvider
from compass.llm.models import LLMConfig, LLMError, LLMResponse, TokenUsage

JSON_MIME_TYPE = "application/json"


class GeminiProvider(LLMProvider):
    """Gemini adapter using the google-generativeai async SDK.

    The system prompt is sent as the head of a single user turn, so one
    configured model serves every request.
    """

    def __init__(self, config: LLMConfig) -> None:
        super().__init__(config)
        genai.configure(api_key=config.api_key)
        self._model = genai.GenerativeModel(config.model)

    async def generate(
        self,
        system: str,
        user: str,
        max_tokens: int = 4096,
        json_mode: bool = False,
    ) -> LLMResponse:
        prompt = f"{system}\n\n{user}" if system else user
        options: dict[str, Any] = {
            "max_output_tokens": max_tokens,
            "temperature": self.config.temperature,
        }
        if json_mode:
            options["response_mime_type"] = JSON_MIME_TYPE
        try:
            response = await self._model.generate_content_async(
                prompt,
                generation_config=genai.types.GenerationConfig(**options),
            )
        except google_exceptions.GoogleAPIError as e:
            raise LLMError(
                "gemini",
                "generate",
                e,
                retryable=isinstance(e, google_exceptions.ResourceExhausted),
            ) from e

        usage = response.usage_metadata
        return LLMResponse(
            content=_response_text(response),
            usage=TokenUsage(
                input_tokens=usage.prompt_token_count if usage else 0,
                output_tokens=usage.candidates_token_count if usage else 0,
            ),
            model=self.config.model,
        )


def _response_text(response: Any) -> str:
    """Text of the first candidate. Blocked or empty responses raise ValueError."""
    try:
        text = response.text
    except ValueError as e:
        # .text raises when the candidate was blocked or has no parts
        raise ValueError(
            f"Gemini returned no text (feedback: {response.prompt_feedback})"
        ) from e
    if not text:
        raise ValueError("No text content in Gemini response")
    return text
