"""
Command-line entry point, for running as a GitHub Actions step.

Reads the pull request event payload from ``GITHUB_EVENT_PATH`` (or
``--event-path``), runs one review and maps the outcome to an exit code.
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError

from ai_pr_reviewer.config import Settings
from ai_pr_reviewer.errors import ConfigurationError, ReviewError
from ai_pr_reviewer.models.webhook import PullRequestEvent
from ai_pr_reviewer.review.engine import SUPPORTED_ACTIONS
from ai_pr_reviewer.runner import build_engine


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ai-pr-review",
        description="Review a pull request diff with an LLM and post the report as a comment.",
    )
    parser.add_argument(
        "--event-path",
        default=os.environ.get("GITHUB_EVENT_PATH"),
        help="Path to the pull_request event JSON (default: $GITHUB_EVENT_PATH).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Override LOG_LEVEL from the environment.",
    )
    return parser


def load_event(path: Optional[str]) -> PullRequestEvent:
    if not path:
        raise ConfigurationError("No event path given and GITHUB_EVENT_PATH is not set")
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
        return PullRequestEvent.model_validate(payload)
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Unusable event payload at {path}: {e}") from e


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    try:
        settings = Settings()
    except ValidationError as e:
        logging.basicConfig(level=(args.log_level or "INFO").upper())
        logger.error(f"Invalid configuration: {e}")
        return EXIT_CONFIG_ERROR

    logging.basicConfig(level=(args.log_level or settings.log_level).upper())

    try:
        event = load_event(args.event_path)
        if event.action not in SUPPORTED_ACTIONS:
            logger.info(f"Unsupported pull request action {event.action!r}; nothing to review")
            return EXIT_OK
        engine = build_engine(settings)
    except ConfigurationError as e:
        logger.error(str(e))
        return EXIT_CONFIG_ERROR

    try:
        result = asyncio.run(engine.run(event))
    except ReviewError as e:
        logger.error(f"Review failed: {e}")
        return EXIT_FAILURE
    except Exception as e:
        logger.exception(f"Review failed: {e}")
        return EXIT_FAILURE

    if result.errored_files:
        logger.warning(f"Files skipped after errors: {', '.join(result.errored_files)}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
