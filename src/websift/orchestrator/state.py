from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from websift.search.engines import WebSearchError


class WebSearchStage(str, Enum):
    INIT = "init"
    SEARCHING = "searching"
    SELECTING = "selecting"
    BUILDING = "building"
    SOURCES_READY = "sources_ready"
    ERROR = "error"
    FINALIZING = "finalizing"
    DONE = "done"


class WebSearchErrorKind(str, Enum):
    EMPTY_SEARCH_RESULT = "empty_search_result"
    PROVIDER_FAILURE = "provider_failure"
    UNKNOWN = "unknown"


class EmptySearchResultError(WebSearchError):
    """The provider succeeded but found no pages."""


def describe_error(exc: Exception) -> tuple[WebSearchErrorKind, str]:
    """Classify a failure and extract the detail shown to the user.

    The detail is the exception's message when it carries one, else its string form.
    """

    if exc.args and isinstance(exc.args[0], str):
        kind = (
            WebSearchErrorKind.EMPTY_SEARCH_RESULT
            if isinstance(exc, EmptySearchResultError)
            else WebSearchErrorKind.PROVIDER_FAILURE
        )
        return kind, exc.args[0]
    return WebSearchErrorKind.UNKNOWN, str(exc) or type(exc).__name__


@dataclass
class RunState:
    prompt: str
    created_at: datetime
    updated_at: datetime
    stage: WebSearchStage = WebSearchStage.INIT
    search_query: str = ""
    page_count: int = 0
    selected_count: int = 0
    error_kind: WebSearchErrorKind | None = None

    def snapshot(self) -> dict[str, str | int | None]:
        return {
            "stage": self.stage.value,
            "search_query": self.search_query,
            "page_count": self.page_count,
            "selected_count": self.selected_count,
            "error_kind": self.error_kind.value if self.error_kind is not None else None,
        }
