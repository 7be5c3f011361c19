# src/ai_pr_reviewer/main.py
import re
import hmac
import hashlib
import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from fastapi import FastAPI, Header, HTTPException, BackgroundTasks, Request
from pydantic import BaseModel, ValidationError, model_validator

from ai_pr_reviewer.config import Settings
from ai_pr_reviewer.errors import ConfigurationError
from ai_pr_reviewer.models.webhook import GitHubPullRequest, GitHubRepository, GitHubUser, PullRequestEvent
from ai_pr_reviewer.review.engine import SUPPORTED_ACTIONS
from ai_pr_reviewer.runner import build_engine


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    return Settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("AI PR Reviewer starting...")
    yield
    logger.info("AI PR Reviewer shutting down...")


app = FastAPI(title="AI PR Reviewer", lifespan=lifespan)


class WebhookResponse(BaseModel):
    status: str
    message: str | None = None


class ReviewRequest(BaseModel):
    url: str | None = None
    owner: str | None = None
    repo: str | None = None
    number: int | None = None

    @model_validator(mode="after")
    def check_params(self):
        if not self.url and not (self.owner and self.repo and self.number):
            raise ValueError("Either url or owner+repo+number required")
        return self


class ReviewResponse(BaseModel):
    status: str
    owner: str | None = None
    repo: str | None = None
    number: int | None = None
    files_reviewed: int | None = None
    published: bool | None = None
    error: str | None = None


def parse_github_pr_url(url: str) -> tuple[str, str, int]:
    """Parse GitHub PR URL -> (owner, repo, number)."""
    match = re.match(r"https?://[^/]+/([^/]+)/([^/]+)/pull/(\d+)", url)
    if not match:
        raise ValueError(f"Invalid GitHub PR URL: {url}")
    return match.group(1), match.group(2), int(match.group(3))


def verify_signature(secret: str, body: bytes, signature: str | None) -> bool:
    """Check an X-Hub-Signature-256 header against the raw request body."""
    if not signature or not signature.startswith("sha256="):
        return False
    expected = hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()
    return hmac.compare_digest(f"sha256={expected}", signature)


@app.get("/health")
async def health():
    return {"status": "ok", "version": "0.1.0"}


@app.post("/webhook/github", response_model=WebhookResponse)
async def github_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    x_github_event: str = Header(...),
    x_hub_signature_256: str | None = Header(default=None),
):
    settings = get_settings()
    body = await request.body()

    # Verify webhook signature
    if settings.github_webhook_secret and not verify_signature(
        settings.github_webhook_secret, body, x_hub_signature_256
    ):
        raise HTTPException(status_code=401, detail="Invalid webhook signature")

    if x_github_event != "pull_request":
        return WebhookResponse(status="ignored", message="Event not relevant")

    try:
        event = PullRequestEvent.model_validate_json(body)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=f"Invalid pull_request payload: {e}")

    if event.action not in SUPPORTED_ACTIONS:
        logger.info(f"Ignoring pull_request action {event.action!r}")
        return WebhookResponse(status="ignored", message=f"Action {event.action} not reviewed")

    background_tasks.add_task(run_review, event)
    return WebhookResponse(status="accepted", message="Review scheduled")


@app.post("/api/review", response_model=ReviewResponse)
async def trigger_review(request: ReviewRequest):
    """Manually trigger a review of the whole pull request diff."""
    settings = get_settings()

    try:
        if request.url:
            owner, repo, number = parse_github_pr_url(request.url)
        else:
            owner, repo, number = request.owner, request.repo, request.number

        event = PullRequestEvent(
            action="opened",
            number=number,
            pull_request=GitHubPullRequest(number=number),
            repository=GitHubRepository(name=repo, owner=GitHubUser(login=owner)),
        )

        engine = build_engine(settings)
        result = await engine.run(event)

        return ReviewResponse(
            status="completed",
            owner=owner,
            repo=repo,
            number=number,
            files_reviewed=result.files_reviewed,
            published=result.published,
        )

    except (ValueError, ConfigurationError) as e:
        return ReviewResponse(status="error", error=str(e))
    except Exception as e:
        logger.exception(f"Review failed: {e}")
        return ReviewResponse(status="error", error=str(e))


async def run_review(event: PullRequestEvent):
    """Background task to run the review."""
    settings = get_settings()

    try:
        engine = build_engine(settings)
    except ConfigurationError as e:
        logger.error(str(e))
        return

    try:
        result = await engine.run(event)
        logger.info(
            f"Review finished for {event.repository.name}#{event.pull_number}: "
            f"state={result.state.value} published={result.published}"
        )
    except Exception as e:
        logger.exception(f"Review failed for {event.repository.name}: {e}")
