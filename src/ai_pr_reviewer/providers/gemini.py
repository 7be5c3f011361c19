# src/ai_pr_reviewer/providers/gemini.py
import httpx
from .base import LLMProvider
from ai_pr_reviewer.errors import EngineError
from ai_pr_reviewer.models.review import GenerationParams


class GeminiProvider(LLMProvider):
    API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

    def __init__(self, api_key: str, timeout: float = 60.0):
        self.api_key = api_key
        self.timeout = timeout

    async def generate(self, prompt: str, params: GenerationParams) -> str:
        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.API_URL.format(model=params.model),
                    params={"key": self.api_key},
                    json={
                        "contents": [{
                            "parts": [{"text": prompt}]
                        }],
                        "generationConfig": {
                            "temperature": params.temperature,
                            "maxOutputTokens": params.max_tokens,
                            "topP": params.top_p,
                            "frequencyPenalty": params.frequency_penalty,
                            "presencePenalty": params.presence_penalty,
                        },
                    },
                    timeout=self.timeout,
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise EngineError(f"Gemini request failed: {e}") from e

        try:
            data = response.json()
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise EngineError(f"Unexpected Gemini response: {response.text[:500]}") from e

        text = text.strip()
        if not text:
            raise EngineError("Gemini returned an empty response")
        return text
