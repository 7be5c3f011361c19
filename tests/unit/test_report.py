# tests/unit/test_report.py
import pytest
from ai_pr_reviewer.models.review import UNATTRIBUTED, ReviewItem
from ai_pr_reviewer.review.report import aggregate, render_report


def _item(line=10, title="Debug log", comment="remove before merge", patch=""):
    return ReviewItem(line_number=line, title=title, comment=comment, suggested_patch=patch)


@pytest.mark.unit
def test_aggregate_preserves_input_order():
    results = [
        ("z.py", [_item()]),
        ("a.py", "narrative"),
        ("m.py", [_item(line=3)]),
    ]

    report = aggregate(results)

    assert list(report) == ["z.py", "a.py", "m.py"]


@pytest.mark.unit
def test_aggregate_omits_empty_results():
    results = [
        ("a.py", []),
        ("b.py", "   "),
        ("c.py", ""),
        ("d.py", [_item()]),
    ]

    report = aggregate(results)

    assert list(report) == ["d.py"]
    assert len(report) == 1


@pytest.mark.unit
def test_aggregate_empty_input():
    report = aggregate([])

    assert not report
    assert report.items_count == 0


@pytest.mark.unit
def test_report_is_read_only():
    report = aggregate([("a.py", [_item()])])

    with pytest.raises(TypeError):
        report["b.py"] = "x"
    assert isinstance(report["a.py"], tuple)


@pytest.mark.unit
def test_aggregate_does_not_merge_items_across_files():
    report = aggregate([("a.py", [_item(line=1)]), ("b.py", [_item(line=2), _item(line=3)])])

    assert [i.line_number for i in report["a.py"]] == [1]
    assert [i.line_number for i in report["b.py"]] == [2, 3]
    assert report.items_count == 3


@pytest.mark.unit
def test_render_structured_report():
    report = aggregate([("src/a.ts", [_item()])], title="AI Reviewer")

    body = render_report(report)

    assert body.startswith("# AI Reviewer\n")
    assert "## src/a.ts\n" in body
    assert "### Debug log(src/a.ts:10)\nremove before merge\n" in body
    assert "```diff" not in body


@pytest.mark.unit
def test_render_includes_suggested_patch():
    report = aggregate([("src/a.ts", [_item(patch="-console.log('x')")])])

    body = render_report(report)

    assert "```diff\n-console.log('x')\n```" in body


@pytest.mark.unit
def test_render_unattributed_item_has_no_line():
    report = aggregate([("src/a.ts", [_item(line=UNATTRIBUTED, title="General")])])

    body = render_report(report)

    assert "### General(src/a.ts)" in body


@pytest.mark.unit
def test_render_narrative_report_in_order():
    report = aggregate([("b.py", "Second file notes"), ("a.py", "First file notes")], title="Report")

    body = render_report(report)

    assert body.index("## b.py\nSecond file notes") < body.index("## a.py\nFirst file notes")


@pytest.mark.unit
def test_aggregate_repeated_path_keeps_both_results(caplog):
    results = [
        ("a.py", [_item(line=1)]),
        ("b.py", [_item(line=2)]),
        ("a.py", [_item(line=9)]),
    ]

    with caplog.at_level("WARNING"):
        report = aggregate(results)

    assert list(report) == ["a.py", "b.py"]
    assert [item.line_number for item in report["a.py"]] == [1, 9]
    assert "a.py" in caplog.text
