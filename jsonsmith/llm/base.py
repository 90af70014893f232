"""Abstract LLM interface for jsonsmith."""

from __future__ import annotations

from abc import ABC, abstractmethod

from jsonsmith.llm.models import LLMConfig, LLMResponse


class LLMProvider(ABC):
    """Provider-agnostic interface for a single text completion.

    One call takes an instruction and a document and returns the complete
    reply. There is no streaming.
    """

    def __init__(self, config: LLMConfig) -> None:
        self.config = config

    @abstractmethod
    async def generate(
        self,
        system: str,
        user: str,
        max_tokens: int = 4096,
    ) -> LLMResponse:
        """Generate a complete response (one-shot)."""
        ...
