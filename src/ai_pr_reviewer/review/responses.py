# src/ai_pr_reviewer/review/responses.py
import json
import logging
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ai_pr_reviewer.errors import ResponseDecodeError
from ai_pr_reviewer.models.review import UNATTRIBUTED, ReviewItem


logger = logging.getLogger(__name__)

# Engines like to wrap JSON in ```json fences despite being told not to.
# Greedy, so fences inside review comments stay part of the payload.
FENCE_RE = re.compile(r"```(?:json)?\s*(.*)\s*```", re.DOTALL)


class EngineReview(BaseModel):
    """One element of the engine's ``reviews`` array."""
    model_config = ConfigDict(populate_by_name=True)

    line_number: int = Field(default=UNATTRIBUTED, alias="lineNumber")
    review_title: str | None = Field(default=None, alias="reviewTitle")
    review_comment: str = Field(default="", alias="reviewComment")
    improve_diff: str | None = Field(default=None, alias="improveDiff")

    @field_validator("line_number", mode="before")
    @classmethod
    def _coerce_line(cls, value: Any) -> int:
        return coerce_line_number(value)

    @field_validator("review_title", "review_comment", "improve_diff", mode="before")
    @classmethod
    def require_text(cls, value: Any) -> Any:
        # pydantic would happily turn 5 into "5"; wrong types mean a malformed item
        if value is not None and not isinstance(value, str):
            raise ValueError(f"expected a string, got {type(value).__name__}")
        return value


def coerce_line_number(value: Any) -> int:
    """Turn an engine-supplied line number into an int, or UNATTRIBUTED."""
    if isinstance(value, bool):
        return UNATTRIBUTED
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else UNATTRIBUTED
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return UNATTRIBUTED
        return int(number) if number.is_integer() else UNATTRIBUTED
    return UNATTRIBUTED


def _load_json(raw: str) -> Any:
    """Parse the reply as JSON, falling back to the body of its outer code fence."""
    text = raw.strip()
    try:
        return json.loads(text)
    except (ValueError, RecursionError):
        match = FENCE_RE.search(text)
        if not match:
            raise
    return json.loads(match.group(1))


def decode_reviews(raw: str) -> list[dict[str, Any]]:
    """Decode the ``reviews`` array, raising ResponseDecodeError on any malformed shape."""
    if not (raw or "").strip():
        raise ResponseDecodeError("Engine returned an empty response", raw=raw)

    try:
        data = _load_json(raw)
    except (ValueError, RecursionError) as e:
        raise ResponseDecodeError(f"Invalid JSON: {e}", raw=raw) from e

    if not isinstance(data, dict):
        raise ResponseDecodeError(f"Expected a JSON object, got {type(data).__name__}", raw=raw)
    if "reviews" not in data:
        raise ResponseDecodeError("Missing 'reviews' field", raw=raw)

    reviews = data["reviews"]
    if not isinstance(reviews, list):
        raise ResponseDecodeError(f"'reviews' is not an array: {type(reviews).__name__}", raw=raw)

    return reviews


def parse_review_items(raw: str) -> list[ReviewItem]:
    """Parse structured engine output into review items. Never raises."""
    try:
        reviews = decode_reviews(raw)
    except ResponseDecodeError as e:
        logger.warning(f"Could not decode engine response ({e}): {e.raw!r}")
        return []

    items = []
    for entry in reviews:
        if not isinstance(entry, dict):
            logger.warning(f"Skipping non-object review entry: {entry!r}")
            continue
        try:
            review = EngineReview.model_validate(entry)
        except ValidationError as e:
            logger.warning(f"Skipping malformed review entry: {e}")
            continue

        if not review.review_comment.strip():
            continue

        items.append(ReviewItem(
            line_number=review.line_number,
            title=(review.review_title or "").strip(),
            comment=review.review_comment.strip(),
            suggested_patch=(review.improve_diff or "").strip("\n"),
        ))

    return items


def parse_narrative(raw: str) -> str:
    """Narrative output is one opaque review; blank means nothing to report."""
    return (raw or "").strip()
