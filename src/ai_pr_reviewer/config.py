# src/ai_pr_reviewer/config.py
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ai_pr_reviewer.models.review import GenerationParams, PromptVariant
from ai_pr_reviewer.review.filters import parse_patterns


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)

    # GitHub
    github_token: str
    github_api_url: str = "https://api.github.com"
    github_webhook_secret: str | None = None

    # LLM Providers
    default_provider: str = "openai"
    openai_api_key: str | None = None
    openai_api_model: str = "gpt-4o-mini"
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.5-flash"

    # Generation
    temperature: float = 0.2
    max_tokens: int = 700
    top_p: float = 1.0
    frequency_penalty: float = 0.0
    presence_penalty: float = 0.0
    engine_timeout: float = 60.0
    max_concurrency: int = Field(default=4, ge=1)

    # Review
    exclude: str = ""
    docs_md: str | None = None
    prompt_variant: PromptVariant = PromptVariant.STRUCTURED
    review_language: str = "English"
    report_title: str = "AI Reviewer"

    # Notifications
    slack_webhook_url: str | None = None

    log_level: str = "INFO"

    @property
    def exclude_patterns(self) -> list[str]:
        return parse_patterns(self.exclude)

    @property
    def model_name(self) -> str:
        if self.default_provider == "gemini":
            return self.gemini_model
        return self.openai_api_model

    def generation_params(self) -> GenerationParams:
        return GenerationParams(
            model=self.model_name,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            top_p=self.top_p,
            frequency_penalty=self.frequency_penalty,
            presence_penalty=self.presence_penalty,
        )
