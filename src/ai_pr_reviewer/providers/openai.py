# src/ai_pr_reviewer/providers/openai.py
import logging
from openai import AsyncOpenAI, OpenAIError
from .base import LLMProvider
from ai_pr_reviewer.errors import EngineError
from ai_pr_reviewer.models.review import GenerationParams


logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    def __init__(self, api_key: str, base_url: str | None = None, timeout: float = 60.0):
        self.api_key = api_key
        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout, max_retries=0)

    async def generate(self, prompt: str, params: GenerationParams) -> str:
        try:
            response = await self.client.chat.completions.create(
                model=params.model,
                messages=[{"role": "system", "content": prompt}],
                temperature=params.temperature,
                max_tokens=params.max_tokens,
                top_p=params.top_p,
                frequency_penalty=params.frequency_penalty,
                presence_penalty=params.presence_penalty,
            )
        except OpenAIError as e:
            raise EngineError(f"OpenAI request failed: {e}") from e

        if not response.choices:
            raise EngineError("OpenAI returned no choices")

        text = (response.choices[0].message.content or "").strip()
        logger.debug(f"OpenAI response length: {len(text)} chars")

        if not text:
            raise EngineError("OpenAI returned an empty response")
        return text
