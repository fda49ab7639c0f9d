"""Web search result models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from websift.models.markdown import MarkdownElement
from websift.models.search import ResultSummary


class ScrapedPage(BaseModel):
    """Document representation of a source page.

    Only ``title`` and ``markdown_tree`` are filled for snippet-based sources.
    """

    title: str
    markdown_tree: MarkdownElement
    site_name: str | None = None
    author: str | None = None
    description: str | None = None
    created_at: datetime | None = None
    modified_at: datetime | None = None


class UsedSource(BaseModel):
    """A selected result enriched with its document tree and answer context."""

    title: str
    link: str
    page: ScrapedPage
    context: str


class WebSearch(BaseModel):
    """Terminal value of a web search run."""

    model_config = ConfigDict(frozen=True)

    prompt: str
    search_query: str = ""
    results: list[ResultSummary] = Field(default_factory=list)
    context_sources: list[UsedSource] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
