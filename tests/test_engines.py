"""Tests for search engine backends."""

from __future__ import annotations

import httpx
import pytest

from websift.config import Settings
from websift.search import engines
from websift.search.engines import (
    DuckDuckGoSearchEngine,
    TavilySearchEngine,
    TavilySearchError,
    WebSearchError,
    get_search_engine,
)


def _patch_transport(monkeypatch: pytest.MonkeyPatch, handler) -> None:
    real_client = httpx.Client

    def _client(**kwargs):
        return real_client(transport=httpx.MockTransport(handler), **kwargs)

    monkeypatch.setattr(engines.httpx, "Client", _client)
    monkeypatch.setattr(engines.time, "sleep", lambda _s: None)


def test_tavily_maps_results_in_order(monkeypatch: pytest.MonkeyPatch) -> None:
    """It should turn Tavily results into pages, skipping entries without url."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "results": [
                    {"url": "https://a.dev", "title": "A", "content": "alpha"},
                    {"title": "no url"},
                    {"url": "https://b.dev", "title": None, "content": None},
                ]
            },
        )

    _patch_transport(monkeypatch, handler)

    pages = TavilySearchEngine(api_key="k").search("q", max_results=5)

    assert [(p.title, p.link, p.snippet, p.position) for p in pages] == [
        ("A", "https://a.dev", "alpha", 1),
        ("", "https://b.dev", "", 2),
    ]


def test_tavily_retries_transient_status(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = {"n": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["n"] += 1
        if calls["n"] == 1:
            return httpx.Response(503)
        return httpx.Response(200, json={"results": []})

    _patch_transport(monkeypatch, handler)

    assert TavilySearchEngine(api_key="k", max_retries=2).search("q", max_results=5) == []
    assert calls["n"] == 2


def test_tavily_gives_up_after_retries(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_transport(monkeypatch, lambda request: httpx.Response(500))

    with pytest.raises(TavilySearchError):
        TavilySearchEngine(api_key="k", max_retries=1).search("q", max_results=5)


def test_tavily_malformed_payload_is_not_retried(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = {"n": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["n"] += 1
        return httpx.Response(200, json={"answer": "x"})

    _patch_transport(monkeypatch, handler)

    with pytest.raises(TavilySearchError, match="missing results"):
        TavilySearchEngine(api_key="k").search("q", max_results=5)
    assert calls["n"] == 1


def test_duckduckgo_maps_results(monkeypatch: pytest.MonkeyPatch) -> None:
    class FakeDDGS:
        def __enter__(self):
            return self

        def __exit__(self, *exc):
            return False

        def text(self, query, max_results):
            return [
                {"href": "https://x.org", "title": "X", "body": "ex"},
                {"title": "missing link"},
                {"url": "https://y.org", "title": "Y", "snippet": "why"},
            ]

    monkeypatch.setattr(engines, "DDGS", FakeDDGS)

    pages = DuckDuckGoSearchEngine().search("q", max_results=3)

    assert [(p.link, p.snippet, p.position) for p in pages] == [("https://x.org", "ex", 1), ("https://y.org", "why", 2)]


def test_duckduckgo_failure_raises_search_error(monkeypatch: pytest.MonkeyPatch) -> None:
    class BrokenDDGS:
        def __enter__(self):
            raise RuntimeError("ratelimited")

        def __exit__(self, *exc):
            return False

    monkeypatch.setattr(engines, "DDGS", BrokenDDGS)

    with pytest.raises(WebSearchError, match="ratelimited"):
        DuckDuckGoSearchEngine().search("q", max_results=3)


def test_get_search_engine_requires_tavily_key() -> None:
    with pytest.raises(ValueError):
        get_search_engine(Settings(search_provider="tavily", tavily_api_key=None))
    engine = get_search_engine(Settings(search_provider="tavily", tavily_api_key="k", tavily_max_retries=1))
    assert isinstance(engine, TavilySearchEngine)
    assert engine.max_retries == 1
