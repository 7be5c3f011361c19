# src/ai_pr_reviewer/review/parser.py
import logging
import re
from unidiff import PatchSet, PatchedFile
from unidiff.errors import UnidiffParseError

from ai_pr_reviewer.models.diff import DELETED_PATH, DiffChunk, DiffFile, DiffLine, LineKind


logger = logging.getLogger(__name__)

HUNK_HEADER_RE = re.compile(r"^@@ -\d+(?:,(\d+))? \+\d+(?:,(\d+))? @@")


def parse_diff(diff_text: str) -> list[DiffFile]:
    """Parse unified diff into files, chunks and numbered lines.

    Every file section is parsed on its own, so a malformed section is
    skipped without losing the files around it.
    """
    files: list[DiffFile] = []

    for section in _split_sections(diff_text):
        try:
            patch = PatchSet(section)
        except UnidiffParseError as e:
            logger.warning(f"Skipping unparseable diff section: {e}")
            continue

        for patched_file in patch:
            files.append(_to_diff_file(patched_file))

    return files


def _split_sections(diff_text: str) -> list[str]:
    """Split diff text at file boundaries, dropping any leading preamble.

    Without ``diff --git`` headers a ``---``/``+++`` pair only starts a new
    file when no hunk is open, since removed and added lines may themselves
    begin with ``--``/``++``.
    """
    lines = diff_text.splitlines(keepends=True)
    has_git_headers = any(line.startswith("diff --git ") for line in lines)

    starts = []
    old_left = new_left = 0
    for i, line in enumerate(lines):
        if has_git_headers:
            if line.startswith("diff --git "):
                starts.append(i)
            continue

        if old_left > 0 or new_left > 0:
            if line.startswith("-"):
                old_left -= 1
            elif line.startswith("+"):
                new_left -= 1
            elif not line.startswith("\\"):
                old_left -= 1
                new_left -= 1
            continue

        hunk = HUNK_HEADER_RE.match(line)
        if hunk:
            old_left = int(hunk.group(1) or 1)
            new_left = int(hunk.group(2) or 1)
        elif line.startswith("--- ") and i + 1 < len(lines) and lines[i + 1].startswith("+++ "):
            starts.append(i)

    bounds = starts + [len(lines)]
    return ["".join(lines[start:end]) for start, end in zip(bounds, bounds[1:])]


def _destination_path(patched_file: PatchedFile) -> str | None:
    if patched_file.is_removed_file:
        return DELETED_PATH

    target = patched_file.target_file
    if not target:
        return None
    if target == DELETED_PATH:
        return DELETED_PATH
    if target.startswith("b/"):
        target = target[2:]
    return target


def _to_diff_file(patched_file: PatchedFile) -> DiffFile:
    chunks = []

    for hunk in patched_file:
        changes = []
        for line in hunk:
            if line.is_added:
                kind, number = LineKind.ADDED, line.target_line_no
            elif line.is_removed:
                kind, number = LineKind.REMOVED, line.source_line_no
            elif line.is_context:
                kind, number = LineKind.CONTEXT, line.target_line_no
            else:
                # "\ No newline at end of file"
                continue

            if number is None:
                number = line.source_line_no

            value = line.value.rstrip("\r\n")
            changes.append(DiffLine(
                line_number=number,
                content=f"{line.line_type}{value}",
                kind=kind,
            ))

        header = (
            f"@@ -{hunk.source_start},{hunk.source_length} "
            f"+{hunk.target_start},{hunk.target_length} @@"
        )
        if hunk.section_header:
            header = f"{header} {hunk.section_header}"

        chunks.append(DiffChunk(header=header, changes=tuple(changes)))

    return DiffFile(path=_destination_path(patched_file), chunks=tuple(chunks))
