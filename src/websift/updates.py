"""Web search update events streamed to the caller.

A web search run produces a sequence of updates. Each update is a pydantic model discriminated
by ``subtype``; ``model_dump(mode="json")`` gives its wire form.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

from websift.models.web_search import UsedSource


class MessageWebSearchUpdateType(str, Enum):
    """Web search update subtypes."""

    GENERAL = "update"
    SOURCES = "sources"
    ERROR = "error"
    FINISHED = "finished"


class _WebSearchUpdateBase(BaseModel):
    type: Literal["webSearch"] = "webSearch"


class MessageWebSearchGeneralUpdate(_WebSearchUpdateBase):
    """Free-form progress text."""

    subtype: Literal["update"] = "update"
    message: str
    args: list[str] = Field(default_factory=list)


class MessageWebSearchSourcesUpdate(_WebSearchUpdateBase):
    """The sources selected for answer generation."""

    subtype: Literal["sources"] = "sources"
    message: str = "sources"
    sources: list[UsedSource] = Field(default_factory=list)


class MessageWebSearchErrorUpdate(_WebSearchUpdateBase):
    """A failed search; ``message`` is a generic label, ``args`` hold the detail."""

    subtype: Literal["error"] = "error"
    message: str
    args: list[str] = Field(default_factory=list)


class MessageWebSearchFinishedUpdate(_WebSearchUpdateBase):
    """Sentinel closing every run."""

    subtype: Literal["finished"] = "finished"


MessageWebSearchUpdate = Annotated[
    Union[
        MessageWebSearchGeneralUpdate,
        MessageWebSearchSourcesUpdate,
        MessageWebSearchErrorUpdate,
        MessageWebSearchFinishedUpdate,
    ],
    Field(discriminator="subtype"),
]

web_search_update_adapter: TypeAdapter[MessageWebSearchUpdate] = TypeAdapter(MessageWebSearchUpdate)


def make_general_update(*, message: str, args: list[str] | None = None) -> MessageWebSearchGeneralUpdate:
    return MessageWebSearchGeneralUpdate(message=message, args=list(args or []))


def make_sources_update(sources: list[UsedSource]) -> MessageWebSearchSourcesUpdate:
    return MessageWebSearchSourcesUpdate(sources=list(sources))


def make_error_update(*, message: str, args: list[str] | None = None) -> MessageWebSearchErrorUpdate:
    return MessageWebSearchErrorUpdate(message=message, args=list(args or []))


def make_final_answer_update() -> MessageWebSearchFinishedUpdate:
    return MessageWebSearchFinishedUpdate()
