"""Node and mark types of the Vaiz rich-document schema.

A document is a list of nodes.  Every node is a plain dict whose ``type``
key is the discriminant; the remaining keys depend on the kind::

    {"type": "heading", "attrs": {"level": 2, "uid": "aB3..."},
     "content": [{"type": "text", "text": "Roadmap", "marks": [{"type": "bold"}]}]}

:class:`NodeType` lists every kind the builders emit, and each kind has a
``TypedDict`` below describing its exact shape.  :data:`DocumentNode` is
the closed union of all of them.  Keys that the builders omit when empty
(``content``, ``marks``, optional attrs) are declared on ``total=False``
subclasses.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal, TypedDict, Union


class NodeType(str, Enum):
    """Wire names of every node kind."""

    TEXT = "text"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    BULLET_LIST = "bulletList"
    ORDERED_LIST = "orderedList"
    LIST_ITEM = "listItem"
    TASK_LIST = "taskList"
    TASK_ITEM = "taskItem"
    TABLE = "extension-table"
    TABLE_ROW = "tableRow"
    TABLE_CELL = "tableCell"
    TABLE_HEADER = "tableHeader"
    BLOCKQUOTE = "blockquote"
    HORIZONTAL_RULE = "horizontalRule"
    DETAILS = "details"
    DETAILS_SUMMARY = "detailsSummary"
    DETAILS_CONTENT = "detailsContent"
    MENTION = "custom-mention"
    IMAGE_BLOCK = "image-block"
    FILES_BLOCK = "files"
    DOC_SIBLINGS = "doc-siblings"
    CODE_BLOCK = "codeBlock"
    EMBED = "embed"


class MarkType(str, Enum):
    """Inline formatting marks, in the order they are applied."""

    BOLD = "bold"
    ITALIC = "italic"
    CODE = "code"
    LINK = "link"


# Kinds whose only child is a text node holding a JSON payload.
PAYLOAD_NODE_TYPES: frozenset[str] = frozenset({
    NodeType.IMAGE_BLOCK.value,
    NodeType.FILES_BLOCK.value,
    NodeType.DOC_SIBLINGS.value,
    NodeType.EMBED.value,
})


# ---------------------------------------------------------------------------
# Marks
# ---------------------------------------------------------------------------

class LinkAttrs(TypedDict):
    href: str
    target: str


class SimpleMark(TypedDict):
    type: Literal["bold", "italic", "code"]


class LinkMark(TypedDict):
    type: Literal["link"]
    attrs: LinkAttrs


Mark = Union[SimpleMark, LinkMark]


# ---------------------------------------------------------------------------
# Inline
# ---------------------------------------------------------------------------

class _TextBase(TypedDict):
    type: Literal["text"]
    text: str


class TextNode(_TextBase, total=False):
    marks: list[Mark]


class MentionItem(TypedDict):
    id: str
    kind: str


class MentionData(TypedDict):
    item: MentionItem


class MentionAttrs(TypedDict):
    uid: str
    custom: Literal[1]
    inline: Literal[True]
    data: MentionData


class MentionNode(TypedDict):
    type: Literal["custom-mention"]
    attrs: MentionAttrs
    content: list[TextNode]


# ---------------------------------------------------------------------------
# Text blocks
# ---------------------------------------------------------------------------

class _ContainerBase(TypedDict, total=False):
    content: list[Any]


class ParagraphNode(_ContainerBase):
    type: Literal["paragraph"]


class HeadingAttrs(TypedDict):
    level: int
    uid: str


class HeadingNode(_ContainerBase):
    type: Literal["heading"]
    attrs: HeadingAttrs


class BlockquoteNode(_ContainerBase):
    type: Literal["blockquote"]


class HorizontalRuleNode(TypedDict):
    type: Literal["horizontalRule"]


class DetailsSummaryNode(_ContainerBase):
    type: Literal["detailsSummary"]


class DetailsContentNode(_ContainerBase):
    type: Literal["detailsContent"]


class DetailsNode(TypedDict):
    type: Literal["details"]
    content: list[Union[DetailsSummaryNode, DetailsContentNode]]


class _CodeBlockAttrsBase(TypedDict):
    uid: str


class CodeBlockAttrs(_CodeBlockAttrsBase, total=False):
    language: str


class CodeBlockNode(_ContainerBase):
    type: Literal["codeBlock"]
    attrs: CodeBlockAttrs


# ---------------------------------------------------------------------------
# Lists
# ---------------------------------------------------------------------------

class ListItemNode(_ContainerBase):
    type: Literal["listItem"]


class BulletListNode(TypedDict):
    type: Literal["bulletList"]
    content: list[ListItemNode]


class OrderedListAttrs(TypedDict):
    start: int


class _OrderedListBase(TypedDict):
    type: Literal["orderedList"]
    content: list[ListItemNode]


class OrderedListNode(_OrderedListBase, total=False):
    attrs: OrderedListAttrs


class TaskItemAttrs(TypedDict):
    checked: bool


class TaskItemNode(_ContainerBase):
    type: Literal["taskItem"]
    attrs: TaskItemAttrs


class UidAttrs(TypedDict):
    uid: str


class TaskListNode(TypedDict):
    type: Literal["taskList"]
    attrs: UidAttrs
    content: list[TaskItemNode]


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

class SpanAttrs(TypedDict):
    colspan: int
    rowspan: int


class TableCellNode(_ContainerBase):
    type: Literal["tableCell"]
    attrs: SpanAttrs


class TableHeaderNode(_ContainerBase):
    type: Literal["tableHeader"]
    attrs: SpanAttrs


class RowAttrs(TypedDict):
    showRowNumbers: bool


class TableRowNode(TypedDict):
    type: Literal["tableRow"]
    attrs: RowAttrs
    content: list[Union[TableCellNode, TableHeaderNode]]


class TableAttrs(TypedDict):
    uid: str
    showRowNumbers: bool


class TableNode(TypedDict):
    type: Literal["extension-table"]
    attrs: TableAttrs
    content: list[TableRowNode]


# ---------------------------------------------------------------------------
# Payload-bearing blocks
# ---------------------------------------------------------------------------

class CustomBlockAttrs(TypedDict):
    uid: str
    custom: Literal[1]
    contenteditable: Literal["false"]


class ImageBlockAttrs(CustomBlockAttrs):
    widthPercent: float


class ImageBlockNode(TypedDict):
    type: Literal["image-block"]
    attrs: ImageBlockAttrs
    content: list[TextNode]


class FilesBlockNode(TypedDict):
    type: Literal["files"]
    attrs: CustomBlockAttrs
    content: list[TextNode]


class DocSiblingsNode(TypedDict):
    type: Literal["doc-siblings"]
    attrs: CustomBlockAttrs
    content: list[TextNode]


class EmbedAttrs(CustomBlockAttrs):
    size: str
    isContentHidden: bool


class EmbedNode(TypedDict):
    type: Literal["embed"]
    attrs: EmbedAttrs
    content: list[TextNode]


DocumentNode = Union[
    TextNode,
    MentionNode,
    ParagraphNode,
    HeadingNode,
    BlockquoteNode,
    HorizontalRuleNode,
    DetailsNode,
    DetailsSummaryNode,
    DetailsContentNode,
    CodeBlockNode,
    BulletListNode,
    OrderedListNode,
    ListItemNode,
    TaskListNode,
    TaskItemNode,
    TableNode,
    TableRowNode,
    TableCellNode,
    TableHeaderNode,
    ImageBlockNode,
    FilesBlockNode,
    DocSiblingsNode,
    EmbedNode,
]
"""Every node shape the builders can return."""


def is_node(value: Any) -> bool:
    """Return ``True`` if *value* looks like a document node."""
    return isinstance(value, dict) and isinstance(value.get("type"), str)


def is_number(value: Any) -> bool:
    """``True`` for ints and floats; booleans do not count as numbers."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)
