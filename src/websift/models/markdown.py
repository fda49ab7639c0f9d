"""Markdown document tree models.

A scraped page is represented as a forward-only tree: every element owns its children and no
element refers back to its parent, so a tree can be serialized or handed over as-is.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterator

from pydantic import BaseModel, Field


class MarkdownElementType(str, Enum):
    """Kinds of markdown elements."""

    ROOT = "root"
    HEADER = "header"
    PARAGRAPH = "paragraph"
    BLOCKQUOTE_PARAGRAPH = "blockquote_paragraph"
    UNORDERED_LIST_ITEM = "unordered_list_item"
    ORDERED_LIST_ITEM = "ordered_list_item"
    CODE_BLOCK = "code_block"


class MarkdownElement(BaseModel):
    """A node of the markdown tree."""

    type: MarkdownElementType
    content: str = ""
    children: list["MarkdownElement"] = Field(default_factory=list)


def iter_elements(tree: MarkdownElement) -> Iterator[MarkdownElement]:
    """Walk the tree depth-first, parents before children."""

    stack = [tree]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def stringify_markdown_tree(tree: MarkdownElement) -> str:
    """Join every non-empty element content with blank lines."""

    return "\n\n".join(el.content for el in iter_elements(tree) if el.content)
