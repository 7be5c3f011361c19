# src/ai_pr_reviewer/providers/base.py
from abc import ABC, abstractmethod
from ai_pr_reviewer.models.review import GenerationParams


class LLMProvider(ABC):
    @abstractmethod
    async def generate(self, prompt: str, params: GenerationParams) -> str:
        """Send prompt to the engine and return its raw text.

        Raises EngineError on transport, timeout, quota or empty-response failure.
        """
        pass
