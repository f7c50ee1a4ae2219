"""Tests for the list and table builders."""

from __future__ import annotations

import pytest

from vaizify.document.lists import (
    bullet_list,
    list_item,
    ordered_list,
    ordered_list_from,
    task_item,
    task_list,
)
from vaizify.document.tables import (
    table,
    table_cell,
    table_cell_span,
    table_header,
    table_header_span,
    table_row,
)
from vaizify.document.text import paragraph
from vaizify.errors import VaizifyBuildError


class TestBulletList:
    def test_strings_become_list_items(self):
        node = bullet_list("alpha", "beta")
        assert node["type"] == "bulletList"
        assert node["content"][0] == {
            "type": "listItem",
            "content": [{"type": "paragraph", "content": [{"type": "text", "text": "alpha"}]}],
        }
        assert len(node["content"]) == 2

    def test_prebuilt_items_kept(self):
        item = list_item(paragraph("x"), bullet_list("nested"))
        node = bullet_list(item)
        assert node["content"] == [item]

    def test_empty_list_item_has_no_content(self):
        assert list_item() == {"type": "listItem"}


class TestOrderedList:
    def test_numeric_start(self):
        node = ordered_list(5, "a", "b")
        assert node["attrs"] == {"start": 5}
        assert len(node["content"]) == 2

    def test_no_start_has_no_attrs(self):
        node = ordered_list("a", "b")
        assert "attrs" not in node
        assert len(node["content"]) == 2

    def test_start_one_has_no_attrs(self):
        assert "attrs" not in ordered_list_from(1, "a")

    def test_bool_is_not_a_start(self):
        with pytest.raises(VaizifyBuildError):
            ordered_list(True, "a")


class TestTaskList:
    def test_unchecked_by_default(self):
        node = task_item("x")
        assert node["attrs"]["checked"] is False

    def test_trailing_bool_is_checked_state(self):
        node = task_item("x", True)
        assert node["attrs"]["checked"] is True
        assert node["content"] == [paragraph("x")]
        assert all(not isinstance(child, bool) for child in node["content"])

    def test_task_list_wraps_strings(self):
        node = task_list(task_item("done", True), "todo")
        assert node["type"] == "taskList"
        assert len(node["attrs"]["uid"]) == 12
        assert [item["attrs"]["checked"] for item in node["content"]] == [True, False]
        assert node["content"][1]["content"][0]["content"][0]["text"] == "todo"


class TestTableCells:
    def test_span_shape(self):
        node = table_cell(2, 3, "x")
        assert node["attrs"] == {"colspan": 2, "rowspan": 3}
        assert node["content"] == [paragraph("x")]

    def test_default_spans(self):
        assert table_cell("x")["attrs"] == {"colspan": 1, "rowspan": 1}

    def test_single_number_is_not_a_span(self):
        with pytest.raises(VaizifyBuildError):
            table_cell(2, "x")

    def test_explicit_span_builders(self):
        assert table_cell_span(1, 2, "a")["attrs"] == {"colspan": 1, "rowspan": 2}
        header = table_header_span(3, 1, "h")
        assert header["type"] == "tableHeader"
        assert header["attrs"] == {"colspan": 3, "rowspan": 1}

    def test_empty_cell_omits_content(self):
        assert "content" not in table_header()


class TestTable:
    def test_header_and_body_rows(self):
        node = table(
            table_row(table_header("A"), table_header("B")),
            table_row("1", "2"),
        )
        assert node["type"] == "extension-table"
        assert node["attrs"]["showRowNumbers"] is False
        assert len(node["attrs"]["uid"]) == 12
        assert len(node["content"]) == 2

        header_row, body_row = node["content"]
        assert header_row["attrs"] == {"showRowNumbers": False}
        for cell in header_row["content"]:
            assert cell["type"] == "tableHeader"
            assert cell["attrs"] == {"colspan": 1, "rowspan": 1}
        assert [cell["type"] for cell in body_row["content"]] == ["tableCell", "tableCell"]
        assert body_row["content"][0]["content"] == [paragraph("1")]
        assert body_row["content"][1]["content"] == [paragraph("2")]

    def test_rows_must_be_nodes(self):
        with pytest.raises(VaizifyBuildError, match="table_row"):
            table("not a row")
