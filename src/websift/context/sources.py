"""Used source construction.

A selected search hit becomes a used source whose page is a two-node markdown tree: a root
holding the title and link, and one paragraph holding the snippet. The snippet is not parsed;
it is also kept verbatim as the answer context.
"""

from __future__ import annotations

from websift.models.markdown import MarkdownElement, MarkdownElementType
from websift.models.search import PageResult
from websift.models.web_search import ScrapedPage, UsedSource


def build_markdown_tree(result: PageResult) -> MarkdownElement:
    return MarkdownElement(
        type=MarkdownElementType.ROOT,
        content=f"{result.title}\n{result.link}",
        children=[MarkdownElement(type=MarkdownElementType.PARAGRAPH, content=result.snippet)],
    )


def build_used_source(result: PageResult) -> UsedSource:
    """Build the used source for one selected page."""

    return UsedSource(
        title=result.title,
        link=result.link,
        page=ScrapedPage(title=result.title or "", markdown_tree=build_markdown_tree(result)),
        context=result.snippet,
    )
