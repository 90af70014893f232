"""OpenAI adapter for jsonsmith."""

from __future__ import annotations

from openai import APIError, AsyncOpenAI, RateLimitError

from jsonsmith.llm.base import LLMProvider
from jsonsmith.llm.models import LLMConfig, LLMError, LLMResponse, TokenUsage


class OpenAIProvider(LLMProvider):
    """OpenAI adapter using the async SDK."""

    def __init__(self, config: LLMConfig) -> None:
        super().__init__(config)
        self._client = AsyncOpenAI(
            api_key=config.api_key,  # falls back to OPENAI_API_KEY env var
            timeout=config.timeout,
            max_retries=2,
        )

    async def generate(
        self,
        system: str,
        user: str,
        max_tokens: int = 4096,
    ) -> LLMResponse:
        try:
            response = await self._client.chat.completions.create(
                model=self.config.model,
                max_tokens=max_tokens,
                temperature=self.config.temperature,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
            )
        except APIError as e:
            raise LLMError(
                "openai", "generate", e, retryable=isinstance(e, RateLimitError)
            ) from e
        if not response.choices:
            raise ValueError("No choices in OpenAI response")
        choice = response.choices[0]
        if not response.usage:
            raise ValueError("No usage data in OpenAI response")
        return LLMResponse(
            content=choice.message.content or "",
            usage=TokenUsage(
                input_tokens=response.usage.prompt_tokens,
                output_tokens=response.usage.completion_tokens,
            ),
            model=response.model,
        )
