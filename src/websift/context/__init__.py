"""Search context building."""

from __future__ import annotations

from websift.context.selector import MAX_OUTPUT_RESULTS, select_results
from websift.context.sources import build_markdown_tree, build_used_source

__all__ = [
    "MAX_OUTPUT_RESULTS",
    "build_markdown_tree",
    "build_used_source",
    "select_results",
]
