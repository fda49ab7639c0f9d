"""Conversation input models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


Role = Literal["system", "user", "assistant"]


class Message(BaseModel):
    """One chat message."""

    role: Role = "user"
    content: str


class Conversation(BaseModel):
    """The conversation a web search is run for."""

    id: str
    title: str = ""
    model: str | None = None
    messages: list[Message] = Field(default_factory=list)


class RagSettings(BaseModel):
    """Assistant retrieval settings.

    Passed through to the search provider untouched.
    """

    allowed_links: list[str] = Field(default_factory=list)
    allowed_domains: list[str] = Field(default_factory=list)
    allow_all_domains: bool = False
