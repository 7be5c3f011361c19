# src/ai_pr_reviewer/review/engine.py
import asyncio
import yaml
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from ai_pr_reviewer.config import Settings
from ai_pr_reviewer.errors import (
    AcquisitionError,
    EngineError,
    PublishError,
    UnsupportedTriggerError,
)
from ai_pr_reviewer.models.config import RepoConfig
from ai_pr_reviewer.models.diff import DiffFile
from ai_pr_reviewer.models.review import PromptVariant, PullRequestDetails, ReviewContext
from ai_pr_reviewer.models.webhook import PullRequestEvent
from ai_pr_reviewer.platforms.base import SourceControlHost
from ai_pr_reviewer.platforms.slack import SlackNotifier
from ai_pr_reviewer.providers.base import LLMProvider
from .filters import filter_files
from .parser import parse_diff
from .prompts import build_review_prompt, build_summary_prompt
from .report import FileResult, ReviewReport, aggregate, render_report
from .responses import parse_narrative, parse_review_items


logger = logging.getLogger(__name__)

SUPPORTED_ACTIONS = ("opened", "synchronize")


class RunState(str, Enum):
    IDLE = "idle"
    DIFF_ACQUIRED = "diff_acquired"
    PARSED = "parsed"
    FILTERED = "filtered"
    REVIEWING = "reviewing"
    AGGREGATED = "aggregated"
    PUBLISHED = "published"
    DONE = "done"
    FAILED = "failed"


@dataclass
class FileOutcome:
    """What one file's review sub-task produced."""
    path: str
    result: FileResult | None = None
    error: str | None = None


@dataclass
class EngineReviewResult:
    """Result of running review on a pull request."""
    state: RunState
    published: bool = False
    files_reviewed: int = 0
    errored_files: list[str] = field(default_factory=list)
    report: ReviewReport | None = None
    comment_body: str = ""


def load_document(path: str | None) -> str | None:
    """Read the supplementary document; an unreadable file counts as absent."""
    if not path:
        return None
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        logger.error(f"Could not read supplementary document {path}: {e}")
        return None


class ReviewEngine:
    def __init__(
        self,
        host: SourceControlHost,
        provider: LLMProvider,
        settings: Settings,
        notifier: SlackNotifier | None = None,
    ):
        self.host = host
        self.provider = provider
        self.settings = settings
        self.params = settings.generation_params()
        self.notifier = notifier
        self.state = RunState.IDLE
        self.history: list[RunState] = [RunState.IDLE]

    def _transition(self, state: RunState) -> None:
        logger.debug(f"Review run: {self.state.value} -> {state.value}")
        self.state = state
        self.history.append(state)

    async def run(self, event: PullRequestEvent) -> EngineReviewResult:
        """Run AI review for a pull request event."""
        try:
            self._check_trigger(event)
        except UnsupportedTriggerError as e:
            logger.info(f"{e}; nothing to review")
            self._transition(RunState.DONE)
            return EngineReviewResult(state=RunState.DONE)

        try:
            return await self._review_pull_request(event)
        except Exception:
            self._transition(RunState.FAILED)
            raise

    def _check_trigger(self, event: PullRequestEvent) -> None:
        if event.action not in SUPPORTED_ACTIONS:
            raise UnsupportedTriggerError(event.action)

    async def _review_pull_request(self, event: PullRequestEvent) -> EngineReviewResult:
        pr, diff_text = await self._acquire(event)
        self._transition(RunState.DIFF_ACQUIRED)

        files = parse_diff(diff_text)
        self._transition(RunState.PARSED)

        repo_config = await self._load_repo_config(pr, event.after or pr.head_sha)
        patterns = self.settings.exclude_patterns + repo_config.exclude
        files = filter_files(files, patterns)
        self._transition(RunState.FILTERED)
        logger.info(f"Reviewing {len(files)} file(s) in {pr.owner}/{pr.repo}#{pr.number}")

        context = ReviewContext(
            owner=pr.owner,
            repo=pr.repo,
            pull_number=pr.number,
            title=pr.title,
            description=pr.description,
            document=load_document(self.settings.docs_md),
            language=repo_config.language or self.settings.review_language,
        )
        variant = repo_config.variant or self.settings.prompt_variant

        self._transition(RunState.REVIEWING)
        outcomes = await self._review_files(files, context, variant)

        errored = [outcome.path for outcome in outcomes if outcome.error is not None]
        report = aggregate(
            ((outcome.path, outcome.result) for outcome in outcomes if outcome.error is None),
            title=self.settings.report_title,
        )
        self._transition(RunState.AGGREGATED)

        result = EngineReviewResult(
            state=RunState.DONE,
            files_reviewed=len(files),
            errored_files=errored,
            report=report,
        )

        if not report:
            logger.info("No review content produced, nothing to publish")
            self._transition(RunState.DONE)
            return result

        result.comment_body = render_report(report)
        try:
            await self.host.post_issue_comment(pr.owner, pr.repo, pr.number, result.comment_body)
        except Exception as e:
            raise PublishError(f"Failed to post review comment: {e}") from e
        self._transition(RunState.PUBLISHED)
        result.published = True
        logger.info(f"Published review for {len(report)} file(s)")

        await self._notify(result.comment_body, context.language)

        self._transition(RunState.DONE)
        return result

    async def _acquire(self, event: PullRequestEvent) -> tuple[PullRequestDetails, str]:
        """Fetch PR metadata and the diff this event asks us to review."""
        owner = event.repository.owner.login
        repo = event.repository.name

        try:
            number = event.pull_number
            pr = await self.host.get_pull_request(owner, repo, number)

            if event.action == "opened":
                diff_text = await self.host.get_diff(owner, repo, number)
            else:
                if not event.before or not event.after:
                    raise ValueError("synchronize event without before/after commits")
                diff_text = await self.host.compare_commits(owner, repo, event.before, event.after)
        except Exception as e:
            raise AcquisitionError(f"Could not acquire pull request diff: {e}") from e

        return pr, diff_text or ""

    async def _load_repo_config(self, pr: PullRequestDetails, ref: str | None) -> RepoConfig:
        """Load .ai-review.yaml from repo or use defaults."""
        if not ref:
            return RepoConfig()

        try:
            yaml_content = await self.host.get_repo_config(pr.owner, pr.repo, ref)
        except Exception as e:
            logger.warning(f"Could not fetch .ai-review.yaml: {e}")
            return RepoConfig()

        if yaml_content is None:
            return RepoConfig()

        try:
            data = yaml.safe_load(yaml_content) or {}
            return RepoConfig(**data)
        except Exception as e:
            logger.warning(f"Invalid .ai-review.yaml: {e}")
            return RepoConfig()

    async def _review_files(
        self,
        files: list[DiffFile],
        context: ReviewContext,
        variant: PromptVariant,
    ) -> list[FileOutcome]:
        semaphore = asyncio.Semaphore(self.settings.max_concurrency)

        async def review_bounded(file: DiffFile) -> FileOutcome:
            async with semaphore:
                return await self._review_file(file, context, variant)

        # gather keeps input order, so outcomes line up with the filtered diff
        return list(await asyncio.gather(*(review_bounded(file) for file in files)))

    async def _review_file(
        self,
        file: DiffFile,
        context: ReviewContext,
        variant: PromptVariant,
    ) -> FileOutcome:
        if not file.chunks:
            # binary, mode-only or pure rename: no changed lines to review
            logger.debug(f"{file.path}: no hunks, skipping engine call")
            return FileOutcome(path=file.path, result=[])

        try:
            prompt = build_review_prompt(file, context, variant)
            raw = await asyncio.wait_for(
                self.provider.generate(prompt, self.params),
                timeout=self.settings.engine_timeout,
            )
        except asyncio.TimeoutError:
            logger.error(f"LLM review timed out for {file.path}")
            return FileOutcome(path=file.path, error="timeout")
        except EngineError as e:
            logger.error(f"LLM review failed for {file.path}: {e}")
            return FileOutcome(path=file.path, error=str(e))
        except Exception as e:
            logger.exception(f"Unexpected error reviewing {file.path}: {e}")
            return FileOutcome(path=file.path, error=str(e))

        if variant is PromptVariant.NARRATIVE:
            return FileOutcome(path=file.path, result=parse_narrative(raw))

        items = parse_review_items(raw)
        logger.debug(f"{file.path}: {len(items)} review item(s)")
        return FileOutcome(path=file.path, result=items)

    async def _notify(self, comment_body: str, language: str) -> None:
        """Send an overall summary to Slack; failures never affect the run."""
        if self.notifier is None:
            return
        try:
            summary = await asyncio.wait_for(
                self.provider.generate(build_summary_prompt(comment_body, language), self.params),
                timeout=self.settings.engine_timeout,
            )
            await self.notifier.post_message(summary)
        except Exception as e:
            logger.warning(f"Failed to send Slack summary: {e}")
