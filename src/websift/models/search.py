"""Search-related models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class PageResult(BaseModel):
    """A single raw web search hit, in the engine's ranking order."""

    title: str = ""
    link: str
    snippet: str = ""
    position: int


class SearchOutcome(BaseModel):
    """Final value of a provider stream."""

    search_query: str
    pages: list[PageResult] = Field(default_factory=list)


class ResultSummary(BaseModel):
    title: str
    link: str
    position: int
