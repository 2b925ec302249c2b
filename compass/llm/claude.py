"""Anthropic Claude adapter for Compass."""

from __future__ import annotations

from anthropic import APIError, AsyncAnthropic, RateLimitError

from compass.llm.base import LLMProvider
from compass.llm.models import LLMConfig, LLMError, LLMResponse, TokenUsage


class ClaudeProvider(LLMProvider):
    """Claude adapter using the Anthropic async SDK."""

    def __init__(self, config: LLMConfig) -> None:
        super().__init__(config)
        self._client = AsyncAnthropic(
            api_key=config.api_key,  # falls back to ANTHROPIC_API_KEY env var
            max_retries=0,
        )

    async def generate(
        self,
        system: str,
        user: str,
        max_tokens: int = 4096,
        json_mode: bool = False,
    ) -> LLMResponse:
        # Messages API has no JSON mode; json_mode relies on the prompt.
        try:
            message = await self._client.messages.create(
                model=self.config.model,
                max_tokens=max_tokens,
                temperature=self.config.temperature,
                system=system,
                messages=[{"role": "user", "content": user}],
            )
        except APIError as e:
            raise LLMError(
                "claude", "generate", e, retryable=isinstance(e, RateLimitError)
            ) from e
        if not message.content or not hasattr(message.content[0], "text"):
            raise ValueError("No text content in Claude response")
        return LLMResponse(
            content=message.content[0].text,
            usage=TokenUsage(
                input_tokens=message.usage.input_tokens,
                output_tokens=message.usage.output_tokens,
            ),
            model=message.model,
        )
