from .parser import parse_diff
from .filters import filter_files, parse_patterns
from .prompts import build_review_prompt
from .responses import parse_narrative, parse_review_items
from .report import ReviewReport, aggregate, render_report

__all__ = [
    "parse_diff",
    "filter_files",
    "parse_patterns",
    "build_review_prompt",
    "parse_narrative",
    "parse_review_items",
    "ReviewReport",
    "aggregate",
    "render_report",
]
