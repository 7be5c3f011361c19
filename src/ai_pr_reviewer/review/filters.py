# src/ai_pr_reviewer/review/filters.py
import re
from functools import lru_cache
from typing import Iterable, Sequence

from ai_pr_reviewer.models.diff import DiffFile


def parse_patterns(value: str) -> list[str]:
    """Split a comma-separated exclude setting into patterns.

    Commas inside ``{a,b}`` alternations belong to the pattern.
    """
    parts, current, depth = [], [], 0
    for c in value:
        if c == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        if c == "{":
            depth += 1
        elif c == "}" and depth > 0:
            depth -= 1
        current.append(c)
    parts.append("".join(current))
    return [part.strip() for part in parts if part.strip()]


@lru_cache(maxsize=256)
def glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Compile a glob where ``*`` stays inside one segment and ``**`` spans segments."""
    return re.compile(rf"\A{_translate(pattern)}\Z")


def _translate(pattern: str) -> str:
    parts = []
    i, n = 0, len(pattern)

    while i < n:
        c = pattern[i]

        if c == "*":
            j = i
            while j < n and pattern[j] == "*":
                j += 1
            starts_segment = i == 0 or pattern[i - 1] == "/"
            ends_segment = j == n or pattern[j] == "/"
            if j - i >= 2 and starts_segment and ends_segment:
                if j < n:
                    # "**/" matches zero or more whole segments
                    parts.append("(?:[^/]*/)*")
                    j += 1
                else:
                    parts.append(".*")
            else:
                parts.append("[^/]*")
            i = j

        elif c == "?":
            parts.append("[^/]")
            i += 1

        elif c == "[":
            end = pattern.find("]", i + 2)
            if end == -1:
                parts.append(re.escape(c))
                i += 1
                continue
            body = pattern[i + 1:end].replace("\\", "\\\\")
            if body.startswith("!"):
                body = "^" + body[1:]
            parts.append(f"[{body}]")
            i = end + 1

        elif c == "{":
            end = pattern.find("}", i + 1)
            options = pattern[i + 1:end].split(",") if end != -1 else []
            if len(options) < 2:
                parts.append(re.escape(c))
                i += 1
                continue
            parts.append("(?:" + "|".join(_translate(option) for option in options) + ")")
            i = end + 1

        else:
            parts.append(re.escape(c))
            i += 1

    return "".join(parts)


def is_excluded(path: str, patterns: Iterable[str]) -> bool:
    """Check if path matches any exclude pattern."""
    return any(glob_to_regex(pattern).match(path) for pattern in patterns if pattern)


def filter_files(files: Sequence[DiffFile], patterns: Sequence[str]) -> list[DiffFile]:
    """Drop deleted/pathless files, then every file matching an exclude pattern.

    Surviving files keep their input order.
    """
    active = [pattern.strip() for pattern in patterns if pattern.strip()]
    return [
        file
        for file in files
        if file.is_reviewable and not is_excluded(file.path, active)
    ]
