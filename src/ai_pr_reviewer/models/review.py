# src/ai_pr_reviewer/models/review.py
from enum import Enum
from pydantic import BaseModel, ConfigDict

# Line number of an item whose engine-supplied line was not numeric.
UNATTRIBUTED = 0


class PromptVariant(str, Enum):
    STRUCTURED = "structured"
    NARRATIVE = "narrative"


class GenerationParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    model: str
    temperature: float = 0.2
    max_tokens: int = 700
    top_p: float = 1.0
    frequency_penalty: float = 0.0
    presence_penalty: float = 0.0


class PullRequestDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    owner: str
    repo: str
    number: int
    title: str = ""
    description: str = ""
    head_sha: str | None = None


class ReviewContext(BaseModel):
    """Per-run inputs shared read-only by every file review."""
    model_config = ConfigDict(frozen=True)

    owner: str
    repo: str
    pull_number: int
    title: str = ""
    description: str = ""
    document: str | None = None
    language: str = "English"


class ReviewItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    line_number: int
    title: str
    comment: str
    suggested_patch: str = ""

    @property
    def is_attributed(self) -> bool:
        return self.line_number != UNATTRIBUTED
