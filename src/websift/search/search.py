"""Search provider stream.

A provider stream yields progress updates and ends with exactly one :class:`SearchOutcome`.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import AsyncIterator, Protocol, Sequence, Union
from urllib.parse import urlsplit

from websift.config import Settings
from websift.llm.client import get_llm_client
from websift.logging import get_logger
from websift.models.conversation import Message, RagSettings
from websift.models.search import PageResult, SearchOutcome
from websift.search.engines import SearchEngine, get_search_engine
from websift.search.query import QueryGenerator
from websift.updates import MessageWebSearchUpdate, make_general_update

logger = get_logger(__name__)

SearchStreamItem = Union[MessageWebSearchUpdate, SearchOutcome]


class WebSearchProvider(Protocol):
    """Search provider interface."""

    def search(
        self,
        messages: Sequence[Message],
        rag_settings: RagSettings | None = None,
        query: str | None = None,
    ) -> AsyncIterator[SearchStreamItem]:
        """Stream progress updates, then one SearchOutcome."""


def _host(link: str) -> str:
    return (urlsplit(link).hostname or "").lower()


def _normalize_domain(domain: str) -> str:
    domain = domain.strip().lower()
    if "://" in domain:
        domain = _host(domain)
    return domain.removeprefix("www.").rstrip("/")


def _matches_domain(host: str, domain: str) -> bool:
    host = host.removeprefix("www.")
    return host == domain or host.endswith("." + domain)


def build_query_from_site_filters(allowed: Sequence[str], blocked: Sequence[str]) -> str:
    """Render ``site:`` operators for allowed and blocked domains."""

    allow = " OR ".join(f"site:{d}" for d in dict.fromkeys(allowed) if d)
    block = " ".join(f"-site:{d}" for d in dict.fromkeys(blocked) if d)
    return " ".join(part for part in (allow, block) if part)


def filter_by_block_list(pages: list[PageResult], blocked: Sequence[str]) -> list[PageResult]:
    """Drop pages hosted on a blocked domain. Positions are left untouched."""

    if not blocked:
        return pages
    return [p for p in pages if not any(_matches_domain(_host(p.link), d) for d in blocked)]


def _under_link(link: str, prefix: str) -> bool:
    return link == prefix or any(link.startswith(prefix + sep) for sep in "/?#")


def filter_by_allowed_links(pages: list[PageResult], links: Sequence[str]) -> list[PageResult]:
    """Keep pages at or below one of the links, matching whole path segments."""

    prefixes = [link.rstrip("/") for link in links]
    return [p for p in pages if any(_under_link(p.link.rstrip("/"), prefix) for prefix in prefixes)]


@dataclass
class SearchEngineProvider:
    """Provider backed by a blocking search engine.

    The engine call runs in a worker thread so the event loop stays free.
    """

    engine: SearchEngine
    query_generator: QueryGenerator = field(default_factory=QueryGenerator)
    allowed_domains: list[str] = field(default_factory=list)
    blocked_domains: list[str] = field(default_factory=list)
    max_results: int = 10

    async def search(
        self,
        messages: Sequence[Message],
        rag_settings: RagSettings | None = None,
        query: str | None = None,
    ) -> AsyncIterator[SearchStreamItem]:
        search_query = query.strip() if query and query.strip() else None
        if search_query is None:
            search_query = await self.query_generator.generate(messages)

        yield make_general_update(message=f"Searching {self.engine.name}", args=[search_query])

        allowed = [_normalize_domain(d) for d in self.allowed_domains]
        blocked = [_normalize_domain(d) for d in self.blocked_domains]
        allowed_links: list[str] = []
        if rag_settings is not None:
            if rag_settings.allowed_links:
                yield make_general_update(message="Using links specified in Assistant")
                allowed_links = list(rag_settings.allowed_links)
                allowed.extend(_normalize_domain(link) for link in allowed_links)
            elif rag_settings.allowed_domains and not rag_settings.allow_all_domains:
                yield make_general_update(message="Filtering on specified domains")
                allowed.extend(_normalize_domain(d) for d in rag_settings.allowed_domains)

        filters = build_query_from_site_filters(allowed, blocked)
        query_with_filters = f"{filters} {search_query}".strip()

        logger.info(
            "Provider search",
            extra={"engine": self.engine.name, "query_len": len(query_with_filters), "filtered": bool(filters)},
        )
        pages = await asyncio.to_thread(self.engine.search, query_with_filters, max_results=self.max_results)
        pages = filter_by_block_list(pages, blocked)
        if allowed_links:
            pages = filter_by_allowed_links(pages, allowed_links)

        yield SearchOutcome(search_query=query_with_filters, pages=pages)


def get_search_provider(settings: Settings) -> SearchEngineProvider:
    """Factory to create the default provider from settings."""

    return SearchEngineProvider(
        engine=get_search_engine(settings),
        query_generator=QueryGenerator(llm=get_llm_client(settings)),
        allowed_domains=list(settings.allowed_domains),
        blocked_domains=list(settings.blocked_domains),
        max_results=settings.search_max_results,
    )
