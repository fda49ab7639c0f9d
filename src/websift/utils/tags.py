"""Tag parsing utilities for LLM output."""

from __future__ import annotations

import re
from typing import Optional


_TAG_BLOCK_TEMPLATE = r"<{name}>(?P<body>.*?)</{name}>"


def find_tag_block(text: str, tag_name: str) -> Optional[str]:
    """Return the body of the first ``<tag_name>...</tag_name>`` block in ``text``.

    Matching is case-insensitive and spans lines. Returns ``None`` when no complete block is
    found.
    """

    if not text:
        return None

    pattern = _TAG_BLOCK_TEMPLATE.format(name=re.escape(tag_name))
    m = re.search(pattern, text, re.DOTALL | re.IGNORECASE)
    if not m:
        return None
    return m.group("body").strip()
