"""Table builders.

A table is a three-level tree::

    {
        "type": "extension-table",
        "attrs": {"uid": "Xy7...", "showRowNumbers": false},
        "content": [
            {
                "type": "tableRow",
                "attrs": {"showRowNumbers": false},
                "content": [
                    {"type": "tableHeader", "attrs": {"colspan": 1, "rowspan": 1},
                     "content": [{"type": "paragraph", "content": [...]}]},
                    ...
                ]
            },
            ...
        ]
    }

Cells accept two call shapes: bare content, or ``(colspan, rowspan,
*content)`` when the first two positional arguments are both numbers.
:func:`table_cell_span` and :func:`table_header_span` spell the second
shape out explicitly.
"""

from __future__ import annotations

from typing import Any

from vaizify.document.ids import new_id
from vaizify.document.nodes import (
    NodeType,
    TableCellNode,
    TableHeaderNode,
    TableNode,
    TableRowNode,
    is_node,
    is_number,
)
from vaizify.document.text import paragraph, wrap_children
from vaizify.errors import VaizifyBuildError


def _cell(
    node_type: NodeType,
    colspan: int,
    rowspan: int,
    content: tuple[Any, ...],
    builder: str,
) -> dict:
    node: dict = {
        "type": node_type.value,
        "attrs": {"colspan": colspan, "rowspan": rowspan},
    }
    wrapped = wrap_children(content, paragraph, builder)
    if wrapped:
        node["content"] = wrapped
    return node


def _split_spans(args: tuple[Any, ...]) -> tuple[int, int, tuple[Any, ...]]:
    if len(args) >= 2 and is_number(args[0]) and is_number(args[1]):
        return args[0], args[1], args[2:]
    return 1, 1, args


def table_cell_span(colspan: int, rowspan: int, *content: Any) -> TableCellNode:
    """Create a body cell spanning *colspan* columns and *rowspan* rows."""
    return _cell(  # type: ignore[return-value]
        NodeType.TABLE_CELL, colspan, rowspan, content, "table_cell",
    )


def table_header_span(colspan: int, rowspan: int, *content: Any) -> TableHeaderNode:
    """Create a header cell spanning *colspan* columns and *rowspan* rows."""
    return _cell(  # type: ignore[return-value]
        NodeType.TABLE_HEADER, colspan, rowspan, content, "table_header",
    )


def table_cell(*args: Any) -> TableCellNode:
    """Create a body cell; raw strings become paragraphs.

    ``table_cell(2, 3, "x")`` spans two columns and three rows,
    ``table_cell("x")`` spans one of each.
    """
    colspan, rowspan, content = _split_spans(args)
    return table_cell_span(colspan, rowspan, *content)


def table_header(*args: Any) -> TableHeaderNode:
    """Create a header cell; same call shapes as :func:`table_cell`."""
    colspan, rowspan, content = _split_spans(args)
    return table_header_span(colspan, rowspan, *content)


def table_row(*cells: TableCellNode | TableHeaderNode | dict | str) -> TableRowNode:
    """Create a row; raw strings become single-paragraph body cells."""
    return {
        "type": "tableRow",
        "attrs": {"showRowNumbers": False},
        "content": wrap_children(cells, table_cell, "table_row"),  # type: ignore[typeddict-item]
    }


def table(*rows: TableRowNode | dict) -> TableNode:
    """Create a table with a fresh uid from prebuilt rows."""
    for row in rows:
        if not is_node(row):
            raise VaizifyBuildError(
                message=f"table() expects rows built with table_row(), got {type(row).__name__}",
                context={"builder": "table", "value": repr(row)[:200]},
            )
    return {
        "type": "extension-table",
        "attrs": {"uid": new_id(), "showRowNumbers": False},
        "content": list(rows),  # type: ignore[arg-type]
    }
