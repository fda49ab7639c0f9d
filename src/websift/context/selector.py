"""Result selection."""

from __future__ import annotations

from typing import Sequence

from websift.models.search import PageResult

MAX_OUTPUT_RESULTS = 5


def select_results(pages: Sequence[PageResult], *, limit: int = MAX_OUTPUT_RESULTS) -> list[PageResult]:
    """Keep pages with a snippet, in ranking order, up to ``limit``."""

    return [p for p in pages if p.snippet][:limit]
