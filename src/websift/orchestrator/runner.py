"""Web search runner.

Drives a search provider, selects the usable results and streams updates to the caller. Every
run ends with a finished update and a :class:`WebSearch` result, whether the search worked or
not.
"""

from __future__ import annotations

import contextlib
from datetime import UTC, datetime
from typing import AsyncIterator, Sequence

from websift.config import Settings, load_settings
from websift.context.selector import MAX_OUTPUT_RESULTS, select_results
from websift.context.sources import build_used_source
from websift.logging import get_logger, run_context, set_stage
from websift.metrics import MetricsCounter, default_metrics
from websift.models.conversation import Conversation, Message, RagSettings
from websift.models.search import ResultSummary, SearchOutcome
from websift.models.web_search import WebSearch
from websift.orchestrator.state import (
    EmptySearchResultError,
    RunState,
    WebSearchStage,
    describe_error,
)
from websift.search.engines import WebSearchError
from websift.search.search import WebSearchProvider, get_search_provider
from websift.updates import (
    MessageWebSearchUpdate,
    make_error_update,
    make_final_answer_update,
    make_general_update,
    make_sources_update,
)

logger = get_logger(__name__)

EMPTY_SEARCH_MESSAGE = "No results found for this search query"
GENERATING_CONTEXT_MESSAGE = "Generating search context"
ERROR_LABEL = "An error occurred"


class WebSearchRun:
    """One web search invocation.

    Iterate it with ``async for`` to receive updates; once the finished update has been
    emitted, :attr:`result` holds the :class:`WebSearch`. A run can be iterated only once.

    Without a ``provider``, one is built from ``settings`` (loaded from the environment when
    omitted) once the search starts, so configuration errors end the run like any other
    failure.
    """

    def __init__(
        self,
        conversation: Conversation,
        messages: Sequence[Message],
        rag_settings: RagSettings | None = None,
        query: str | None = None,
        *,
        provider: WebSearchProvider | None = None,
        metrics: MetricsCounter,
        settings: Settings | None = None,
        max_output_results: int | None = None,
    ) -> None:
        if not messages:
            raise ValueError("messages must not be empty")
        self.conversation = conversation
        self.messages = list(messages)
        self.rag_settings = rag_settings
        self.query = query
        self._provider = provider
        self._settings = settings
        self._metrics = metrics
        self._max_output_results = max_output_results
        self._started = False
        self._result: WebSearch | None = None

    @property
    def result(self) -> WebSearch:
        if self._result is None:
            raise RuntimeError("web search run has not finished")
        return self._result

    def __aiter__(self) -> AsyncIterator[MessageWebSearchUpdate]:
        if self._started:
            raise RuntimeError("web search run can only be iterated once")
        self._started = True
        return self._run()

    def _advance(self, state: RunState, stage: WebSearchStage) -> None:
        state.stage = stage
        set_stage(stage.value)
        logger.info("Web search stage", extra=state.snapshot())

    def _resolve(self) -> tuple[WebSearchProvider, int]:
        settings = self._settings
        provider = self._provider
        if provider is None:
            if settings is None:
                settings = load_settings()
            provider = get_search_provider(settings)
        if self._max_output_results is not None:
            limit = self._max_output_results
        elif settings is not None:
            limit = settings.max_output_results
        else:
            limit = MAX_OUTPUT_RESULTS
        return provider, limit

    async def _search(self, provider: WebSearchProvider) -> AsyncIterator[MessageWebSearchUpdate | SearchOutcome]:
        """Relay provider updates; the outcome, if any, is yielded last."""

        stream = provider.search(self.messages, self.rag_settings, self.query)
        closing = contextlib.aclosing(stream) if hasattr(stream, "aclose") else contextlib.nullcontext(stream)
        async with closing:
            async for item in stream:
                yield item
                if isinstance(item, SearchOutcome):
                    return

    async def _run(self) -> AsyncIterator[MessageWebSearchUpdate]:
        now = datetime.now(UTC)
        state = RunState(prompt=self.messages[-1].content, created_at=now, updated_at=now)
        self._metrics.inc()

        with run_context(conversation_id=self.conversation.id, stage=state.stage.value):
            result: WebSearch
            try:
                self._advance(state, WebSearchStage.SEARCHING)
                provider, limit = self._resolve()
                outcome: SearchOutcome | None = None
                async for item in self._search(provider):
                    if isinstance(item, SearchOutcome):
                        outcome = item
                    else:
                        yield item

                if outcome is None:
                    raise WebSearchError("Search provider finished without a result")
                state.search_query = outcome.search_query
                state.page_count = len(outcome.pages)
                if not outcome.pages:
                    raise EmptySearchResultError(EMPTY_SEARCH_MESSAGE)

                self._advance(state, WebSearchStage.SELECTING)
                yield make_general_update(message=GENERATING_CONTEXT_MESSAGE)
                selected = select_results(outcome.pages, limit=limit)
                state.selected_count = len(selected)

                self._advance(state, WebSearchStage.BUILDING)
                context_sources = [build_used_source(page) for page in selected]
                result = WebSearch(
                    prompt=state.prompt,
                    search_query=outcome.search_query,
                    results=[ResultSummary(title=p.title, link=p.link, position=p.position) for p in selected],
                    context_sources=context_sources,
                    created_at=state.created_at,
                    updated_at=state.updated_at,
                )

                self._advance(state, WebSearchStage.SOURCES_READY)
                yield make_sources_update(context_sources)
            except Exception as exc:
                state.error_kind, message = describe_error(exc)
                self._advance(state, WebSearchStage.ERROR)
                logger.error(message, extra={"error_kind": state.error_kind.value})
                yield make_error_update(message=ERROR_LABEL, args=[message])
                result = WebSearch(prompt=state.prompt, created_at=state.created_at, updated_at=state.updated_at)

            self._advance(state, WebSearchStage.FINALIZING)
            self._result = result
            yield make_final_answer_update()
            self._advance(state, WebSearchStage.DONE)


def run_web_search_stream(
    conversation: Conversation,
    messages: Sequence[Message],
    rag_settings: RagSettings | None = None,
    query: str | None = None,
    *,
    settings: Settings | None = None,
    provider: WebSearchProvider | None = None,
    metrics: MetricsCounter | None = None,
) -> WebSearchRun:
    """Create a web search run.

    Settings and the default provider are resolved when the run starts searching.
    """

    return WebSearchRun(
        conversation,
        messages,
        rag_settings,
        query,
        provider=provider,
        metrics=metrics if metrics is not None else default_metrics().request_count,
        settings=settings,
    )


async def run_web_search(
    conversation: Conversation,
    messages: Sequence[Message],
    rag_settings: RagSettings | None = None,
    query: str | None = None,
    *,
    settings: Settings | None = None,
    provider: WebSearchProvider | None = None,
    metrics: MetricsCounter | None = None,
) -> WebSearch:
    """Run a web search to completion and return its result.

    This is a convenience wrapper around :func:`run_web_search_stream`.
    """

    run = run_web_search_stream(
        conversation,
        messages,
        rag_settings,
        query,
        settings=settings,
        provider=provider,
        metrics=metrics,
    )
    async for _ in run:
        pass
    return run.result
