# src/ai_pr_reviewer/models/diff.py
from dataclasses import dataclass, field
from enum import Enum

# Destination path of a file removed by the diff.
DELETED_PATH = "/dev/null"


class LineKind(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    CONTEXT = "context"


@dataclass(frozen=True)
class DiffLine:
    """One line of a hunk.

    ``line_number`` is the new-file number for added and context lines and
    the old-file number for removed lines. ``content`` keeps the ``+``/``-``/`` ``
    marker.
    """
    line_number: int
    content: str
    kind: LineKind


@dataclass(frozen=True)
class DiffChunk:
    header: str
    changes: tuple[DiffLine, ...] = ()


@dataclass(frozen=True)
class DiffFile:
    path: str | None
    chunks: tuple[DiffChunk, ...] = field(default_factory=tuple)

    @property
    def is_reviewable(self) -> bool:
        return bool(self.path) and self.path != DELETED_PATH

    @property
    def added_line_numbers(self) -> list[int]:
        return [
            line.line_number
            for chunk in self.chunks
            for line in chunk.changes
            if line.kind is LineKind.ADDED
        ]

    def render_lines(self) -> str:
        """Render every chunk line as ``<line_number> <content>``."""
        return "\n".join(
            "\n".join(f"{line.line_number} {line.content}" for line in chunk.changes)
            for chunk in self.chunks
        )
