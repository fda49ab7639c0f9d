"""Pydantic models used across the project."""

from __future__ import annotations

from websift.models.conversation import Conversation, Message, RagSettings
from websift.models.markdown import MarkdownElement, MarkdownElementType
from websift.models.search import PageResult, ResultSummary, SearchOutcome
from websift.models.web_search import ScrapedPage, UsedSource, WebSearch

__all__ = [
    "Conversation",
    "MarkdownElement",
    "MarkdownElementType",
    "Message",
    "PageResult",
    "RagSettings",
    "ResultSummary",
    "ScrapedPage",
    "SearchOutcome",
    "UsedSource",
    "WebSearch",
]
