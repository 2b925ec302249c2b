"""Abstract LLM interface for Compass."""

from __future__ import annotations

from abc import ABC, abstractmethod

from compass.llm.models import LLMConfig, LLMResponse


class LLMProvider(ABC):
    """Provider-agnostic text generation.

    Compass sends one assembled prompt per request and does not retry,
    so adapters disable SDK-level retries.
    """

    def __init__(self, config: LLMConfig) -> None:
        self.config = config

    @abstractmethod
    async def generate(
        self,
        system: str,
        user: str,
        max_tokens: int = 4096,
        json_mode: bool = False,
    ) -> LLMResponse:
        """Generate a complete response (one-shot).

        With json_mode the adapter asks the model for a bare JSON document
        where the provider supports it. Callers still parse defensively.
        """
        ...
