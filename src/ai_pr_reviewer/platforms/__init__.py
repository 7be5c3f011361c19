from .base import SourceControlHost
from .github import GitHubClient

__all__ = ["SourceControlHost", "GitHubClient"]
