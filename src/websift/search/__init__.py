"""Search providers and engines."""

from __future__ import annotations

from websift.search.engines import (
    DuckDuckGoSearchEngine,
    SearchEngine,
    TavilySearchEngine,
    TavilySearchError,
    WebSearchError,
    get_search_engine,
)
from websift.search.search import (
    SearchEngineProvider,
    SearchStreamItem,
    WebSearchProvider,
    get_search_provider,
)

__all__ = [
    "DuckDuckGoSearchEngine",
    "SearchEngine",
    "SearchEngineProvider",
    "SearchStreamItem",
    "TavilySearchEngine",
    "TavilySearchError",
    "WebSearchError",
    "WebSearchProvider",
    "get_search_engine",
    "get_search_provider",
]
