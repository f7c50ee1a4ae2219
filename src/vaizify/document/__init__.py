"""Builders for the Vaiz rich-document JSON tree.

Every builder is a pure function returning a plain ``dict`` node, so a
document is just a list of builder results::

    from vaizify.document import bullet_list, heading, paragraph, table, table_row

    content = [
        heading(1, "Sprint 14"),
        paragraph("Goals for the next two weeks:"),
        bullet_list("ship search", "fix uploads"),
        table(table_row("owner", "status"), table_row("ana", "done")),
    ]
    client.replace_json_document(document_id, content)

Public API:

- text: :func:`text`, :func:`link_text`, :func:`paragraph`,
  :func:`heading`, :func:`blockquote`, :func:`horizontal_rule`,
  :func:`details`, :func:`code_block`
- lists: :func:`bullet_list`, :func:`ordered_list`, :func:`task_list`
- tables: :func:`table`, :func:`table_row`, :func:`table_cell`,
  :func:`table_header`
- rich blocks: :func:`mention`, :func:`image_block`, :func:`files_block`,
  :func:`toc_block`, :func:`embed_block`
- payloads: :func:`encode_payload`, :func:`decode_payload`
"""

from vaizify.document.blocks import (
    anchors_block,
    files_block,
    image_block,
    mention,
    mention_document,
    mention_milestone,
    mention_task,
    mention_user,
    siblings_block,
    toc_block,
)
from vaizify.document.embed import embed_block, extract_embed_url
from vaizify.document.ids import new_id
from vaizify.document.lists import (
    bullet_list,
    list_item,
    ordered_list,
    ordered_list_from,
    task_item,
    task_list,
)
from vaizify.document.nodes import DocumentNode, MarkType, NodeType
from vaizify.document.payloads import (
    EmbedPayload,
    FileEntry,
    FilesPayload,
    ImagePayload,
    SiblingsPayload,
    decode_payload,
    encode_payload,
)
from vaizify.document.tables import (
    table,
    table_cell,
    table_cell_span,
    table_header,
    table_header_span,
    table_row,
)
from vaizify.document.text import (
    blockquote,
    code_block,
    details,
    details_content,
    details_summary,
    heading,
    horizontal_rule,
    link_text,
    paragraph,
    text,
)

__all__ = [
    # Types
    "DocumentNode",
    "MarkType",
    "NodeType",
    # Ids
    "new_id",
    # Text
    "text",
    "link_text",
    "paragraph",
    "heading",
    "blockquote",
    "horizontal_rule",
    "details",
    "details_summary",
    "details_content",
    "code_block",
    # Lists
    "bullet_list",
    "list_item",
    "ordered_list",
    "ordered_list_from",
    "task_item",
    "task_list",
    # Tables
    "table",
    "table_row",
    "table_cell",
    "table_cell_span",
    "table_header",
    "table_header_span",
    # Rich blocks
    "mention",
    "mention_user",
    "mention_document",
    "mention_task",
    "mention_milestone",
    "image_block",
    "files_block",
    "toc_block",
    "anchors_block",
    "siblings_block",
    "embed_block",
    "extract_embed_url",
    # Payloads
    "ImagePayload",
    "FileEntry",
    "FilesPayload",
    "EmbedPayload",
    "SiblingsPayload",
    "encode_payload",
    "decode_payload",
]
