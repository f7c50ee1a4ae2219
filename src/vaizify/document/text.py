"""Inline text and text-block builders.

Every container builder takes a variadic mix of prebuilt nodes and raw
strings.  Raw strings are wrapped according to the container's context:

* inline containers (paragraph, heading, details summary) wrap a string
  with :func:`text`;
* block containers (blockquote, details content) wrap a string with
  :func:`paragraph`.

Empty containers omit their ``content`` key entirely.

Usage::

    from vaizify.document import heading, paragraph, text

    nodes = [
        heading(1, "Release notes"),
        paragraph("Shipped ", text("today", bold=True), "."),
    ]
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from vaizify.document.ids import new_id
from vaizify.document.nodes import (
    BlockquoteNode,
    CodeBlockNode,
    DetailsContentNode,
    DetailsNode,
    DetailsSummaryNode,
    HeadingNode,
    HorizontalRuleNode,
    Mark,
    MarkType,
    NodeType,
    ParagraphNode,
    TextNode,
    is_node,
)
from vaizify.errors import VaizifyBuildError

# ---------------------------------------------------------------------------
# Child normalisation (shared with lists / tables)
# ---------------------------------------------------------------------------

def wrap_children(
    children: Iterable[Any],
    wrap: Callable[[str], dict],
    builder: str,
) -> list[dict]:
    """Return *children* with every raw string passed through *wrap*.

    Raises
    ------
    VaizifyBuildError
        If a child is neither a string nor a node dict.
    """
    wrapped: list[dict] = []
    for child in children:
        if isinstance(child, str):
            wrapped.append(wrap(child))
        elif is_node(child):
            wrapped.append(child)
        else:
            raise VaizifyBuildError(
                message=(
                    f"{builder}() expects strings or document nodes, "
                    f"got {type(child).__name__}"
                ),
                context={"builder": builder, "value": repr(child)[:200]},
            )
    return wrapped


def _container(node_type: NodeType, children: list[dict]) -> dict:
    node: dict = {"type": node_type.value}
    if children:
        node["content"] = children
    return node


# ---------------------------------------------------------------------------
# Inline
# ---------------------------------------------------------------------------

def text(
    content: str,
    bold: bool = False,
    italic: bool = False,
    code: bool = False,
    link: str | None = None,
    target: str = "_blank",
) -> TextNode:
    """Create a text node with optional formatting marks.

    The remote schema rejects empty text, so ``""`` becomes a single
    space.  Marks are emitted in the order bold, italic, code, link, and
    the ``marks`` key is left out when none apply.

    Parameters
    ----------
    content:
        The text to display.
    bold, italic, code:
        Formatting flags.
    link:
        Optional URL; adds a ``link`` mark pointing at it.
    target:
        Browsing context for the link.
    """
    node: TextNode = {"type": "text", "text": content or " "}

    marks: list[Mark] = []
    if bold:
        marks.append({"type": MarkType.BOLD.value})
    if italic:
        marks.append({"type": MarkType.ITALIC.value})
    if code:
        marks.append({"type": MarkType.CODE.value})
    if link:
        marks.append({
            "type": MarkType.LINK.value,
            "attrs": {"href": link, "target": target},
        })

    if marks:
        node["marks"] = marks
    return node


def link_text(
    content: str,
    href: str,
    target: str = "_blank",
    bold: bool = False,
    italic: bool = False,
) -> TextNode:
    """Create a hyperlink text node."""
    return text(content, bold=bold, italic=italic, link=href, target=target)


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

def paragraph(*children: TextNode | dict | str) -> ParagraphNode:
    """Create a paragraph; raw strings become text nodes."""
    return _container(  # type: ignore[return-value]
        NodeType.PARAGRAPH, wrap_children(children, text, "paragraph"),
    )


def heading(level: int, *children: TextNode | dict | str) -> HeadingNode:
    """Create a heading of *level* 1-6 with a fresh uid."""
    if isinstance(level, bool) or not isinstance(level, int) or not 1 <= level <= 6:
        raise VaizifyBuildError(
            message=f"heading level must be an integer from 1 to 6, got {level!r}",
            context={"builder": "heading", "value": level},
        )
    node: dict = {
        "type": NodeType.HEADING.value,
        "attrs": {"level": level, "uid": new_id()},
    }
    content = wrap_children(children, text, "heading")
    if content:
        node["content"] = content
    return node  # type: ignore[return-value]


def blockquote(*children: ParagraphNode | dict | str) -> BlockquoteNode:
    """Create a blockquote; raw strings become paragraphs."""
    return _container(  # type: ignore[return-value]
        NodeType.BLOCKQUOTE, wrap_children(children, paragraph, "blockquote"),
    )


def horizontal_rule() -> HorizontalRuleNode:
    """Create a horizontal divider."""
    return {"type": "horizontalRule"}


def details_summary(*children: TextNode | dict | str) -> DetailsSummaryNode:
    """Create the always-visible summary line of a details section."""
    return _container(  # type: ignore[return-value]
        NodeType.DETAILS_SUMMARY, wrap_children(children, text, "details_summary"),
    )


def details_content(*children: ParagraphNode | dict | str) -> DetailsContentNode:
    """Create the collapsible body of a details section."""
    return _container(  # type: ignore[return-value]
        NodeType.DETAILS_CONTENT, wrap_children(children, paragraph, "details_content"),
    )


def details(
    summary: DetailsSummaryNode | dict | str,
    *content: DetailsContentNode | ParagraphNode | dict | str,
) -> DetailsNode:
    """Create a collapsible section.

    The result always has exactly two children: the summary and a single
    ``detailsContent``.  Body arguments that are raw strings become
    paragraphs.  A single prebuilt ``detailsContent`` passed on its own is
    used as-is; otherwise every body argument is gathered into one
    ``detailsContent``, with the children of any prebuilt ones spliced in
    place.
    """
    if isinstance(summary, str):
        summary_node: dict = details_summary(summary)  # type: ignore[assignment]
    elif is_node(summary):
        summary_node = summary  # type: ignore[assignment]
    else:
        raise VaizifyBuildError(
            message=f"details() summary must be a string or node, got {type(summary).__name__}",
            context={"builder": "details", "value": repr(summary)[:200]},
        )

    items = wrap_children(content, paragraph, "details")
    content_type = NodeType.DETAILS_CONTENT.value

    if len(items) == 1 and items[0]["type"] == content_type:
        body = items[0]
    else:
        merged: list[dict] = []
        for item in items:
            if item["type"] == content_type:
                merged.extend(item.get("content", []))
            else:
                merged.append(item)
        body = details_content(*merged)  # type: ignore[assignment]

    return {"type": "details", "content": [summary_node, body]}  # type: ignore[list-item]


def code_block(code: str = "", language: str = "") -> CodeBlockNode:
    """Create a code block.

    ``content`` is omitted for empty *code* and ``attrs.language`` for an
    empty *language*.
    """
    attrs: dict = {"uid": new_id()}
    if language:
        attrs["language"] = language

    node: dict = {"type": NodeType.CODE_BLOCK.value, "attrs": attrs}
    if code:
        node["content"] = [{"type": NodeType.TEXT.value, "text": code}]
    return node  # type: ignore[return-value]
