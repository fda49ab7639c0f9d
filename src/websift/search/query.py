"""Search query generation."""

from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass
from typing import Sequence

from websift.llm.client import ChatMessage, LLMClient
from websift.logging import get_logger
from websift.models.conversation import Message
from websift.prompts import QUERY_GENERATION_SYSTEM_PROMPT
from websift.utils.tags import find_tag_block

logger = get_logger(__name__)

MAX_QUERY_CHARS = 400
_HISTORY_TURNS = 4


def fallback_query(messages: Sequence[Message]) -> str:
    """Use the last message content, whitespace collapsed and truncated."""

    text = re.sub(r"\s+", " ", messages[-1].content).strip()
    return text[:MAX_QUERY_CHARS].strip()


@dataclass(frozen=True)
class QueryGenerator:
    """Turn a conversation into a web search query.

    Without an LLM the last message is used as-is.
    """

    llm: LLMClient | None = None

    async def generate(self, messages: Sequence[Message]) -> str:
        if self.llm is None:
            return fallback_query(messages)

        history = "\n".join(f"{m.role}: {m.content}" for m in messages[-_HISTORY_TURNS:])
        chat = [
            ChatMessage(role="system", content=QUERY_GENERATION_SYSTEM_PROMPT),
            ChatMessage(role="user", content=history),
        ]
        raw = await asyncio.to_thread(self.llm.complete, chat, temperature=0.0)
        query = find_tag_block(raw, "query") or raw.strip()
        query = re.sub(r"\s+", " ", query).strip()[:MAX_QUERY_CHARS]
        if not query:
            logger.warning("Query generation returned nothing, using last message")
            return fallback_query(messages)
        return query
