"""Tests for result selection."""

from __future__ import annotations

from websift.context.selector import MAX_OUTPUT_RESULTS, select_results
from websift.models.search import PageResult


def _page(position: int, snippet: str = "text") -> PageResult:
    return PageResult(title=f"t{position}", link=f"https://example.com/{position}", snippet=snippet, position=position)


def test_select_results_drops_empty_snippets_and_truncates() -> None:
    """It should keep the first five pages with a snippet, in input order."""

    pages = [_page(1), _page(2, ""), _page(3), _page(4), _page(5), _page(6), _page(7)]

    selected = select_results(pages)

    assert MAX_OUTPUT_RESULTS == 5
    assert [p.position for p in selected] == [1, 3, 4, 5, 6]


def test_select_results_all_empty_snippets() -> None:
    """It should return an empty list when no page has a snippet."""

    assert select_results([_page(1, ""), _page(2, "")]) == []


def test_select_results_does_not_rerank() -> None:
    """It should preserve the provider order even when positions are not sorted."""

    pages = [_page(9), _page(2), _page(5)]
    assert [p.position for p in select_results(pages, limit=2)] == [9, 2]


def test_select_results_keeps_zero_based_positions() -> None:
    pages = [_page(0), _page(1, ""), _page(2)]

    assert [p.position for p in select_results(pages)] == [0, 2]
