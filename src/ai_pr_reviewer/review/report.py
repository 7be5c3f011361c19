# src/ai_pr_reviewer/review/report.py
import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Iterable, Union

from ai_pr_reviewer.models.review import ReviewItem


logger = logging.getLogger(__name__)

FileResult = Union[str, list[ReviewItem], tuple[ReviewItem, ...]]
ReportEntry = Union[str, tuple[ReviewItem, ...]]


class ReviewReport(Mapping[str, ReportEntry]):
    """Read-only mapping of file path to its review, in filtered-diff order."""

    def __init__(self, title: str, entries: Iterable[tuple[str, ReportEntry]] = ()):
        self.title = title
        self._entries = MappingProxyType(dict(entries))

    def __getitem__(self, path: str) -> ReportEntry:
        return self._entries[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ReviewReport(title={self.title!r}, files={list(self._entries)!r})"

    @property
    def items_count(self) -> int:
        return sum(len(entry) for entry in self._entries.values() if isinstance(entry, tuple))


def _has_content(result: FileResult) -> bool:
    if isinstance(result, str):
        return bool(result.strip())
    return len(result) > 0


def _merge(first: ReportEntry, second: ReportEntry) -> ReportEntry:
    if isinstance(first, str) and isinstance(second, str):
        return f"{first}\n\n{second}"
    if isinstance(first, tuple) and isinstance(second, tuple):
        return first + second
    raise TypeError("Cannot merge narrative and structured results for one path")


def aggregate(results: Iterable[tuple[str, FileResult]], title: str = "AI Reviewer") -> ReviewReport:
    """Merge per-file results into one report, skipping files with nothing to say.

    A path seen twice keeps its first position and gets both results.
    """
    entries: dict[str, ReportEntry] = {}
    for path, result in results:
        if not _has_content(result):
            continue
        entry = result.strip() if isinstance(result, str) else tuple(result)
        if path in entries:
            logger.warning(f"Diff lists {path} more than once, merging its reviews")
            entry = _merge(entries[path], entry)
        entries[path] = entry
    return ReviewReport(title, entries.items())


def format_item(path: str, item: ReviewItem) -> str:
    location = f"{path}:{item.line_number}" if item.is_attributed else path
    parts = [f"### {item.title}({location})", item.comment]
    if item.suggested_patch.strip():
        parts.append(f"```diff\n{item.suggested_patch}\n```")
    return "\n".join(parts) + "\n"


def render_report(report: ReviewReport) -> str:
    """Render the report as the Markdown comment body."""
    sections = [f"# {report.title}\n"]
    for path, entry in report.items():
        if isinstance(entry, str):
            sections.append(f"## {path}\n{entry}\n")
        else:
            items = "\n".join(format_item(path, item) for item in entry)
            sections.append(f"## {path}\n{items}")
    return "\n".join(sections)
