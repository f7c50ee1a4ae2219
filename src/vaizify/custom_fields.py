"""Helpers for board custom fields.

Three groups of pure functions build the request bodies and values the
board endpoints expect:

* field requests: ``make_*_field`` return the camelCase body of a
  ``createBoardCustomField`` call;
* field edits: select-option add/remove/edit and the ``edit_custom_field_*``
  helpers return an ``editBoardCustomField`` body;
* values: ``make_*_value`` and the relation/member helpers format what a
  task stores for a field.

Only the option edits can fail: removing or editing an option whose id is
not in the caller's current list raises
:class:`~vaizify.errors.VaizifyNotFoundError`.

Usage::

    from vaizify.custom_fields import Color, Icon, make_select_field, make_select_option

    body = make_select_field(
        "Priority", board_id,
        [make_select_option("High", Color.RED, Icon.FIRE),
         make_select_option("Low", Color.GRAY, Icon.CIRCLE)],
    )
"""

from __future__ import annotations

import hashlib
from collections.abc import Mapping, Sequence
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

from vaizify.errors import VaizifyNotFoundError, VaizifyValidationError

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class CustomFieldType(str, Enum):
    TEXT = "Text"
    NUMBER = "Number"
    CHECKBOX = "Checkbox"
    DATE = "Date"
    MEMBER = "Member"
    TASK_RELATIONS = "TaskRelations"
    SELECT = "Select"
    URL = "Url"


class Color(str, Enum):
    """Colours available to select options."""

    RED = "Red"
    ORANGE = "Orange"
    YELLOW = "Yellow"
    GREEN = "Green"
    TEAL = "Teal"
    BLUE = "Blue"
    PURPLE = "Purple"
    MAGENTA = "Magenta"
    GRAY = "Gray"


class Icon(str, Enum):
    """Icons available to select options."""

    FLAG = "Flag"
    CIRCLE = "Circle"
    TARGET = "Target"
    CROWN = "Crown"
    FIRE = "Fire"
    STAR = "Star"
    CHECK = "Check"
    ALERT = "Alert"


# ---------------------------------------------------------------------------
# Select options
# ---------------------------------------------------------------------------

class SelectOption:
    """One choice of a select field.

    Without an explicit *option_id* the id is derived from the title (the
    first 24 hex digits of its MD5), so building the same option twice
    yields the same id.
    """

    __slots__ = ("title", "color", "icon", "id")

    def __init__(
        self,
        title: str,
        color: Color | str,
        icon: Icon | str,
        option_id: str | None = None,
    ) -> None:
        self.title = title
        self.color = color
        self.icon = icon
        self.id = option_id or self._id_for(title)

    @staticmethod
    def _id_for(title: str) -> str:
        return hashlib.md5(title.encode("utf-8")).hexdigest()[:24]

    def to_dict(self) -> dict[str, Any]:
        return {
            "_id": self.id,
            "title": self.title,
            "color": _enum_value(self.color),
            "icon": _enum_value(self.icon),
        }

    def __repr__(self) -> str:
        return f"SelectOption(title={self.title!r}, id={self.id!r})"


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def make_select_option(
    title: str,
    color: Color | str,
    icon: Icon | str,
    option_id: str | None = None,
) -> SelectOption:
    return SelectOption(title, color, icon, option_id)


def _option_dict(option: SelectOption | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(option, SelectOption):
        return option.to_dict()
    if isinstance(option, Mapping):
        return dict(option)
    raise VaizifyValidationError(
        message=(
            "Select options must be SelectOption instances or mappings, "
            f"got {type(option).__name__}"
        ),
        context={"value": repr(option)[:200]},
    )


def find_select_option(
    options: Sequence[Mapping[str, Any]],
    option_id: str,
) -> int:
    """Return the index of the option whose ``_id`` is *option_id*.

    Raises
    ------
    VaizifyNotFoundError
        If no option in *options* has that id.
    """
    for index, option in enumerate(options):
        if option.get("_id") == option_id:
            return index
    raise VaizifyNotFoundError(
        message=f"Option with ID '{option_id}' not found in existing options",
        context={"resource_type": "select_option", "resource_id": option_id},
    )


# ---------------------------------------------------------------------------
# Field requests
# ---------------------------------------------------------------------------

def _field_request(
    name: str,
    field_type: CustomFieldType,
    board_id: str,
    description: str | None,
    hidden: bool,
) -> dict[str, Any]:
    request: dict[str, Any] = {
        "name": name,
        "type": field_type.value,
        "boardId": board_id,
    }
    if description is not None:
        request["description"] = description
    request["hidden"] = hidden
    return request


def make_text_field(
    name: str, board_id: str, description: str | None = None, hidden: bool = False,
) -> dict[str, Any]:
    return _field_request(name, CustomFieldType.TEXT, board_id, description, hidden)


def make_number_field(
    name: str, board_id: str, description: str | None = None, hidden: bool = False,
) -> dict[str, Any]:
    return _field_request(name, CustomFieldType.NUMBER, board_id, description, hidden)


def make_checkbox_field(
    name: str, board_id: str, description: str | None = None, hidden: bool = False,
) -> dict[str, Any]:
    return _field_request(name, CustomFieldType.CHECKBOX, board_id, description, hidden)


def make_date_field(
    name: str, board_id: str, description: str | None = None, hidden: bool = False,
) -> dict[str, Any]:
    return _field_request(name, CustomFieldType.DATE, board_id, description, hidden)


def make_member_field(
    name: str, board_id: str, description: str | None = None, hidden: bool = False,
) -> dict[str, Any]:
    return _field_request(name, CustomFieldType.MEMBER, board_id, description, hidden)


def make_task_relations_field(
    name: str, board_id: str, description: str | None = None, hidden: bool = False,
) -> dict[str, Any]:
    return _field_request(name, CustomFieldType.TASK_RELATIONS, board_id, description, hidden)


def make_url_field(
    name: str, board_id: str, description: str | None = None, hidden: bool = False,
) -> dict[str, Any]:
    return _field_request(name, CustomFieldType.URL, board_id, description, hidden)


def make_select_field(
    name: str,
    board_id: str,
    options: Sequence[SelectOption | Mapping[str, Any]],
    description: str | None = None,
    hidden: bool = False,
) -> dict[str, Any]:
    """Build a select field request with its initial *options*."""
    request = _field_request(name, CustomFieldType.SELECT, board_id, description, hidden)
    request["options"] = [_option_dict(option) for option in options]
    return request


# ---------------------------------------------------------------------------
# Field edits
# ---------------------------------------------------------------------------

def add_select_option(
    field_id: str,
    board_id: str,
    new_option: SelectOption | Mapping[str, Any],
    existing_options: Sequence[Mapping[str, Any]],
) -> dict[str, Any]:
    """Append *new_option* to a select field's options."""
    return {
        "fieldId": field_id,
        "boardId": board_id,
        "options": [*existing_options, _option_dict(new_option)],
    }


def remove_select_option(
    field_id: str,
    board_id: str,
    option_id: str,
    existing_options: Sequence[Mapping[str, Any]],
) -> dict[str, Any]:
    """Drop the option *option_id* from a select field.

    Raises
    ------
    VaizifyNotFoundError
        If *option_id* is not among *existing_options*.
    """
    find_select_option(existing_options, option_id)
    return {
        "fieldId": field_id,
        "boardId": board_id,
        "options": [opt for opt in existing_options if opt.get("_id") != option_id],
    }


def edit_select_option(
    field_id: str,
    board_id: str,
    option_id: str,
    updated_option: SelectOption | Mapping[str, Any],
    existing_options: Sequence[Mapping[str, Any]],
) -> dict[str, Any]:
    """Replace the option *option_id*, keeping its id.

    Raises
    ------
    VaizifyNotFoundError
        If *option_id* is not among *existing_options*.
    """
    index = find_select_option(existing_options, option_id)
    replacement = _option_dict(updated_option)
    replacement["_id"] = option_id

    options = list(existing_options)
    options[index] = replacement
    return {"fieldId": field_id, "boardId": board_id, "options": options}


def edit_custom_field_name(field_id: str, board_id: str, new_name: str) -> dict[str, Any]:
    return {"fieldId": field_id, "boardId": board_id, "name": new_name}


def edit_custom_field_description(
    field_id: str, board_id: str, new_description: str | None = None,
) -> dict[str, Any]:
    request: dict[str, Any] = {"fieldId": field_id, "boardId": board_id}
    if new_description is not None:
        request["description"] = new_description
    return request


def edit_custom_field_visibility(field_id: str, board_id: str, hidden: bool) -> dict[str, Any]:
    return {"fieldId": field_id, "boardId": board_id, "hidden": hidden}


def edit_custom_field_complete(
    field_id: str,
    board_id: str,
    name: str | None = None,
    description: str | None = None,
    hidden: bool | None = None,
    options: Sequence[SelectOption | Mapping[str, Any]] | None = None,
) -> dict[str, Any]:
    """Edit several properties at once; ``None`` leaves a property untouched."""
    request: dict[str, Any] = {"fieldId": field_id, "boardId": board_id}
    if name is not None:
        request["name"] = name
    if description is not None:
        request["description"] = description
    if hidden is not None:
        request["hidden"] = hidden
    if options is not None:
        request["options"] = [_option_dict(option) for option in options]
    return request


# ---------------------------------------------------------------------------
# Values
# ---------------------------------------------------------------------------

def make_task_relation_value(related_task_ids: Sequence[str]) -> list[str]:
    return list(related_task_ids)


def add_task_relation(current_relations: Sequence[str], new_task_id: str) -> list[str]:
    """Return *current_relations* plus *new_task_id*, without duplicates."""
    relations = list(current_relations)
    if new_task_id not in relations:
        relations.append(new_task_id)
    return relations


def remove_task_relation(current_relations: Sequence[str], task_id: str) -> list[str]:
    return [related for related in current_relations if related != task_id]


def make_member_value(member_ids: str | Sequence[str]) -> str | list[str]:
    return member_ids if isinstance(member_ids, str) else list(member_ids)


def add_member_to_field(current_members: str | Sequence[str], member_id: str) -> list[str]:
    """Add *member_id*; a single-member value is promoted to a list."""
    members = [current_members] if isinstance(current_members, str) else list(current_members)
    if member_id not in members:
        members.append(member_id)
    return members


def remove_member_from_field(
    current_members: str | Sequence[str],
    member_id: str,
) -> str | list[str]:
    """Remove *member_id*.

    The field stores one member as a bare string and several as a list,
    so the result collapses accordingly: ``[]`` when nobody is left, the
    remaining id when one is left, a list otherwise.
    """
    if isinstance(current_members, str):
        return [] if current_members == member_id else current_members

    remaining = [member for member in current_members if member != member_id]
    if len(remaining) == 1:
        return remaining[0]
    return remaining


def _iso(value: date | datetime | str) -> str:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        stamp = value.astimezone(timezone.utc).isoformat(timespec="milliseconds")
        return stamp.replace("+00:00", "Z")
    if isinstance(value, date):
        return value.isoformat()
    return value


def make_date_value(value: date | datetime | str) -> str:
    """Format a date value; datetimes become UTC ISO-8601 with a ``Z`` suffix.

    Naive datetimes are taken to be UTC.  Strings pass through unchanged.
    """
    return _iso(value)


def make_date_range_value(
    start: date | datetime | str,
    end: date | datetime | str,
) -> dict[str, str]:
    return {"start": _iso(start), "end": _iso(end)}


def make_text_value(value: Any) -> str:
    return str(value)


def make_number_value(value: int | float | str) -> str:
    """Whole floats drop their fractional part: ``1.0`` becomes ``"1"``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def make_checkbox_value(checked: bool) -> str:
    return "true" if checked else "false"


def make_url_value(url: str) -> str:
    return str(url)
