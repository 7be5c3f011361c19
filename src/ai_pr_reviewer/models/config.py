from pydantic import BaseModel, Field

from .review import PromptVariant


class RepoConfig(BaseModel):
    """Overrides read from ``.ai-review.yaml`` in the reviewed repository."""

    language: str | None = None
    variant: PromptVariant | None = None
    exclude: list[str] = Field(default_factory=list)
