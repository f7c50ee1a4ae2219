"""Bullet, ordered and task list builders.

Raw strings passed as list items are wrapped as ``listItem(paragraph(s))``
(or ``taskItem(paragraph(s))`` for task lists), so simple lists can be
written as plain strings::

    bullet_list("alpha", "beta")
    ordered_list(3, "third", "fourth")          # numbering starts at 3
    task_list(task_item("write docs", True), "ship it")
"""

from __future__ import annotations

from typing import Any

from vaizify.document.ids import new_id
from vaizify.document.nodes import (
    BulletListNode,
    ListItemNode,
    NodeType,
    OrderedListNode,
    TaskItemNode,
    TaskListNode,
    is_number,
)
from vaizify.document.text import paragraph, wrap_children


def _string_item(item: str) -> dict:
    return list_item(paragraph(item))  # type: ignore[return-value]


def list_item(*content: Any) -> ListItemNode:
    """Create a list item wrapping arbitrary child nodes."""
    node: dict = {"type": NodeType.LIST_ITEM.value}
    if content:
        node["content"] = list(content)
    return node  # type: ignore[return-value]


def bullet_list(*items: ListItemNode | dict | str) -> BulletListNode:
    """Create a bulleted list."""
    return {
        "type": "bulletList",
        "content": wrap_children(items, _string_item, "bullet_list"),  # type: ignore[typeddict-item]
    }


def ordered_list_from(start: int, *items: ListItemNode | dict | str) -> OrderedListNode:
    """Create a numbered list whose first item is numbered *start*.

    ``attrs.start`` is only written when *start* is not ``1``.
    """
    node: dict = {
        "type": NodeType.ORDERED_LIST.value,
        "content": wrap_children(items, _string_item, "ordered_list"),
    }
    if start != 1:
        node["attrs"] = {"start": start}
    return node  # type: ignore[return-value]


def ordered_list(*args: Any) -> OrderedListNode:
    """Create a numbered list.

    Two call shapes are accepted: ``ordered_list(item, ...)`` and
    ``ordered_list(start, item, ...)``.  The second is recognised solely
    by the first positional argument being a number.
    """
    if args and is_number(args[0]):
        return ordered_list_from(args[0], *args[1:])
    return ordered_list_from(1, *args)


def task_item(*args: Any) -> TaskItemNode:
    """Create a checklist item.

    A trailing boolean argument is consumed as the ``checked`` state and
    is not part of the content; without one the item is unchecked.  Raw
    strings become paragraphs.
    """
    checked = False
    content = list(args)
    if content and isinstance(content[-1], bool):
        checked = content.pop()

    node: dict = {
        "type": NodeType.TASK_ITEM.value,
        "attrs": {"checked": checked},
    }
    wrapped = wrap_children(content, paragraph, "task_item")
    if wrapped:
        node["content"] = wrapped
    return node  # type: ignore[return-value]


def task_list(*items: TaskItemNode | dict | str) -> TaskListNode:
    """Create a checklist with a fresh uid; raw strings are unchecked items."""
    return {
        "type": "taskList",
        "attrs": {"uid": new_id()},
        "content": wrap_children(  # type: ignore[typeddict-item]
            items, lambda item: task_item(item, False), "task_list",
        ),
    }
