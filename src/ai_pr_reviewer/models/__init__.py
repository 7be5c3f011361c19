from .config import RepoConfig
from .diff import DELETED_PATH, DiffChunk, DiffFile, DiffLine, LineKind
from .review import (
    UNATTRIBUTED,
    GenerationParams,
    PromptVariant,
    PullRequestDetails,
    ReviewContext,
    ReviewItem,
)
from .webhook import PullRequestEvent

__all__ = [
    "RepoConfig",
    "DELETED_PATH",
    "DiffChunk",
    "DiffFile",
    "DiffLine",
    "LineKind",
    "UNATTRIBUTED",
    "GenerationParams",
    "PromptVariant",
    "PullRequestDetails",
    "ReviewContext",
    "ReviewItem",
    "PullRequestEvent",
]
