# tests/unit/test_parser.py
import pytest
from ai_pr_reviewer.models.diff import DELETED_PATH, LineKind
from ai_pr_reviewer.review.parser import parse_diff


@pytest.mark.unit
@pytest.mark.parametrize("text", ["", "   \n", "\n\n"])
def test_parse_diff_empty_input(text):
    assert parse_diff(text) == []


@pytest.mark.unit
def test_parse_diff_extracts_files_in_order(readme_diff, scenario_a_diff):
    files = parse_diff(readme_diff + scenario_a_diff)

    assert [f.path for f in files] == ["README.md", "src/a.ts"]


@pytest.mark.unit
def test_parse_diff_added_line_number(scenario_a_diff):
    files = parse_diff(scenario_a_diff)

    assert len(files) == 1
    lines = files[0].chunks[0].changes
    added = [line for line in lines if line.kind is LineKind.ADDED]
    assert len(added) == 1
    assert added[0].line_number == 10
    assert added[0].content == "+console.log('x')"


@pytest.mark.unit
def test_parse_diff_context_lines_keep_new_file_numbering(scenario_a_diff):
    files = parse_diff(scenario_a_diff)

    numbers = [line.line_number for line in files[0].chunks[0].changes]
    assert numbers == [8, 9, 10, 11]
    assert files[0].chunks[0].changes[0].content == " const a = 1;"


@pytest.mark.unit
def test_parse_diff_removed_line_uses_old_number(mixed_diff):
    files = parse_diff(mixed_diff)

    changes = files[0].chunks[0].changes
    removed = [line for line in changes if line.kind is LineKind.REMOVED]

    assert [line.line_number for line in removed] == [12]
    assert files[0].added_line_numbers == [12, 13]


@pytest.mark.unit
def test_parse_diff_new_file_numbers_are_consecutive(mixed_diff):
    files = parse_diff(mixed_diff)

    new_side = [
        line.line_number
        for line in files[0].chunks[0].changes
        if line.kind is not LineKind.REMOVED
    ]
    assert new_side == list(range(11, 16))


@pytest.mark.unit
def test_parse_diff_every_line_has_a_number(mixed_diff, deleted_file_diff, renamed_diff):
    files = parse_diff(mixed_diff + deleted_file_diff + renamed_diff)

    assert len(files) == 3
    for file in files:
        for chunk in file.chunks:
            for line in chunk.changes:
                assert isinstance(line.line_number, int)


@pytest.mark.unit
def test_parse_diff_new_file():
    diff = """--- /dev/null
+++ b/new_file.py
@@ -0,0 +1,3 @@
+def new_func():
+    pass
+
"""
    files = parse_diff(diff)

    assert len(files) == 1
    assert files[0].path == "new_file.py"
    assert files[0].added_line_numbers == [1, 2, 3]


@pytest.mark.unit
def test_parse_diff_deleted_file_gets_sentinel(deleted_file_diff):
    files = parse_diff(deleted_file_diff)

    assert files[0].path == DELETED_PATH
    assert files[0].is_reviewable is False
    assert [line.line_number for line in files[0].chunks[0].changes] == [1, 2]


@pytest.mark.unit
def test_parse_diff_renamed_file_uses_destination_path(renamed_diff):
    files = parse_diff(renamed_diff)

    assert files[0].path == "lib/new_name.py"


@pytest.mark.unit
def test_parse_diff_skips_no_newline_marker():
    diff = """--- a/x.txt
+++ b/x.txt
@@ -1 +1 @@
-old
\\ No newline at end of file
+new
\\ No newline at end of file
"""
    files = parse_diff(diff)

    contents = [line.content for line in files[0].chunks[0].changes]
    assert contents == ["-old", "+new"]


@pytest.mark.unit
def test_parse_diff_malformed_section_keeps_earlier_files(scenario_a_diff, truncated_diff):
    files = parse_diff(scenario_a_diff + truncated_diff)

    assert [f.path for f in files] == ["src/a.ts"]


@pytest.mark.unit
def test_parse_diff_malformed_section_keeps_later_files(scenario_a_diff, truncated_diff):
    files = parse_diff(truncated_diff + scenario_a_diff)

    assert [f.path for f in files] == ["src/a.ts"]


@pytest.mark.unit
def test_parse_diff_ignores_preamble(scenario_a_diff):
    diff = "From 1234 Mon Sep 17 00:00:00 2001\nSubject: [PATCH] tweak\n\n" + scenario_a_diff

    files = parse_diff(diff)

    assert [f.path for f in files] == ["src/a.ts"]


@pytest.mark.unit
def test_parse_diff_chunk_header(scenario_a_diff):
    files = parse_diff(scenario_a_diff)

    assert files[0].chunks[0].header == "@@ -8,3 +8,4 @@ export function f() {"


@pytest.mark.unit
def test_render_lines_prefixes_line_numbers(scenario_a_diff):
    files = parse_diff(scenario_a_diff)

    lines = files[0].render_lines().splitlines()

    assert lines[0] == "8  const a = 1;"
    assert "10 +console.log('x')" in lines


@pytest.mark.unit
def test_parse_diff_plain_unified_dash_lines_inside_hunk():
    diff = (
        "--- a/q.sql\n"
        "+++ b/q.sql\n"
        "@@ -1,3 +1,3 @@\n"
        " select 1;\n"
        "--- old note\n"
        "+++ new note\n"
        " select 2;\n"
        "--- a/r.sql\n"
        "+++ b/r.sql\n"
        "@@ -1 +1 @@\n"
        "-x\n"
        "+y\n"
    )

    files = parse_diff(diff)

    assert [f.path for f in files] == ["q.sql", "r.sql"]
    contents = [line.content for line in files[0].chunks[0].changes]
    assert contents == [" select 1;", "--- old note", "+++ new note", " select 2;"]
    assert files[0].added_line_numbers == [2]
