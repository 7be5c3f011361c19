# src/ai_pr_reviewer/runner.py
from ai_pr_reviewer.config import Settings
from ai_pr_reviewer.errors import ConfigurationError
from ai_pr_reviewer.platforms.github import GitHubClient
from ai_pr_reviewer.platforms.slack import SlackNotifier
from ai_pr_reviewer.providers.factory import get_provider
from ai_pr_reviewer.review.engine import ReviewEngine


def build_engine(settings: Settings) -> ReviewEngine:
    """Wire the GitHub client, LLM provider and notifier for one run."""
    provider = get_provider(settings)
    if provider is None:
        raise ConfigurationError(
            f"No LLM provider configured (provider={settings.default_provider!r})"
        )

    notifier = SlackNotifier(settings.slack_webhook_url) if settings.slack_webhook_url else None
    return ReviewEngine(
        host=GitHubClient(token=settings.github_token, base_url=settings.github_api_url),
        provider=provider,
        settings=settings,
        notifier=notifier,
    )
