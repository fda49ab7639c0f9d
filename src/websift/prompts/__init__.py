from __future__ import annotations

from websift.prompts.search import QUERY_GENERATION_SYSTEM_PROMPT

__all__ = [
    "QUERY_GENERATION_SYSTEM_PROMPT",
]
