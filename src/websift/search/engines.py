"""Web search engine backends."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Protocol

import httpx
from duckduckgo_search import DDGS

from websift.config import Settings
from websift.logging import get_logger
from websift.models.search import PageResult

logger = get_logger(__name__)


class SearchEngine(Protocol):
    """Blocking search backend interface."""

    name: str

    def search(self, query: str, *, max_results: int) -> list[PageResult]:
        """Search web."""


class WebSearchError(RuntimeError):
    pass


class TavilySearchError(WebSearchError):
    pass


@dataclass(frozen=True)
class TavilySearchEngine:
    """Tavily API search engine.

    Notes:
        - API key must be provided via settings (`WEBSIFT_TAVILY_API_KEY`).
        - Only url/title/content are requested; the content becomes the page snippet.
    """

    api_key: str
    base_url: str = "https://api.tavily.com"
    search_depth: str = "basic"
    timeout_s: float = 30.0
    max_retries: int = 3
    retry_backoff_s: float = 0.75
    retry_max_backoff_s: float = 8.0
    name: str = "tavily"

    def search(self, query: str, *, max_results: int) -> list[PageResult]:
        """Search using Tavily.

        Args:
            query: Search query.
            max_results: Maximum number of results.

        Returns:
            List of results in Tavily's ranking order.
        """

        url = f"{self.base_url.rstrip('/')}/search"
        payload = {
            "api_key": self.api_key,
            "query": query,
            "max_results": max_results,
            "search_depth": self.search_depth,
            "include_answer": False,
            "include_raw_content": False,
            "include_images": False,
        }

        last_err: Exception | None = None
        started = time.monotonic()

        with httpx.Client(timeout=httpx.Timeout(self.timeout_s), follow_redirects=True) as client:
            for attempt in range(self.max_retries + 1):
                status_code: int | None = None
                try:
                    resp = client.post(url, json=payload)
                    status_code = resp.status_code
                    if status_code in {429, 500, 502, 503, 504}:
                        raise httpx.HTTPStatusError(
                            f"tavily transient status={status_code}",
                            request=resp.request,
                            response=resp,
                        )
                    resp.raise_for_status()
                    results = self._parse_results(resp.json())
                    logger.info(
                        "Tavily search ok",
                        extra={
                            "engine": self.name,
                            "query_len": len(query),
                            "attempt": attempt,
                            "status_code": status_code,
                            "result_count": len(results),
                        },
                    )
                    return results
                except TavilySearchError:
                    raise
                except (httpx.HTTPError, ValueError) as e:
                    last_err = e

                if attempt >= self.max_retries:
                    break

                sleep_s = self._retry_delay(last_err, attempt)
                logger.warning(
                    "Tavily search retry",
                    extra={
                        "engine": self.name,
                        "attempt": attempt,
                        "max_retries": self.max_retries,
                        "status_code": status_code,
                        "sleep_s": sleep_s,
                        "elapsed_ms": int((time.monotonic() - started) * 1000),
                    },
                )
                time.sleep(sleep_s)

        logger.error(
            "Tavily search failed",
            extra={
                "engine": self.name,
                "max_retries": self.max_retries,
                "elapsed_ms": int((time.monotonic() - started) * 1000),
                "error_type": type(last_err).__name__ if last_err is not None else None,
            },
        )
        raise TavilySearchError(f"Tavily search failed: {last_err}") from last_err

    def _parse_results(self, data: object) -> list[PageResult]:
        if not isinstance(data, dict):
            raise TavilySearchError("tavily response not a JSON object")
        raw_results = data.get("results")
        if not isinstance(raw_results, list):
            raise TavilySearchError("tavily response missing results list")

        results: list[PageResult] = []
        for item in raw_results:
            if not isinstance(item, dict) or not item.get("url"):
                continue
            results.append(
                PageResult(
                    title=item.get("title") or "",
                    link=item["url"],
                    snippet=item.get("content") or item.get("snippet") or "",
                    position=len(results) + 1,
                )
            )
        return results

    def _retry_delay(self, err: Exception | None, attempt: int) -> float:
        if isinstance(err, httpx.HTTPStatusError) and err.response.status_code == 429:
            retry_after = err.response.headers.get("retry-after")
            if retry_after is not None:
                try:
                    return float(retry_after)
                except ValueError:
                    pass
        return min(self.retry_max_backoff_s, self.retry_backoff_s * (2**attempt))


@dataclass(frozen=True)
class DuckDuckGoSearchEngine:
    """DuckDuckGo search engine."""

    name: str = "duckduckgo"

    def search(self, query: str, *, max_results: int) -> list[PageResult]:
        """Search using DuckDuckGo.

        Args:
            query: Search query.
            max_results: Maximum number of results.

        Returns:
            List of results.
        """

        results: list[PageResult] = []
        try:
            with DDGS() as ddgs:
                for r in ddgs.text(query, max_results=max_results) or []:
                    link = r.get("href") or r.get("url")
                    if not link:
                        continue
                    results.append(
                        PageResult(
                            title=r.get("title") or "",
                            link=link,
                            snippet=r.get("body") or r.get("snippet") or "",
                            position=len(results) + 1,
                        )
                    )
        except Exception as e:
            raise WebSearchError(f"DuckDuckGo search failed: {e}") from e

        return results


def get_search_engine(settings: Settings) -> SearchEngine:
    """Factory to create a search engine based on settings."""

    if settings.search_provider == "tavily":
        if not settings.tavily_api_key:
            raise ValueError(
                "Missing WEBSIFT_TAVILY_API_KEY while search_provider=tavily. "
                "Set it in environment variables or .env."
            )
        return TavilySearchEngine(
            api_key=settings.tavily_api_key,
            base_url=settings.tavily_api_base_url,
            search_depth=settings.tavily_search_depth,
            timeout_s=settings.tavily_timeout_s,
            max_retries=settings.tavily_max_retries,
            retry_backoff_s=settings.tavily_retry_backoff_s,
            retry_max_backoff_s=settings.tavily_retry_max_backoff_s,
        )

    return DuckDuckGoSearchEngine()
