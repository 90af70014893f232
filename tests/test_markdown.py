"""Tests for jsonsmith.convert.markdown: strategy selection and rendering."""

import pytest

from jsonsmith.convert.markdown import (
    EMPTY_ARRAY_MARKER,
    EMPTY_OBJECT_MARKER,
    MAX_TABLE_COLUMNS,
    NULL_MARKER,
    RenderStrategy,
    choose_strategy,
    record_keys,
    render_markdown,
)


# ---------------------------------------------------------------------------
# Strategy selection
# ---------------------------------------------------------------------------


class TestChooseStrategy:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, RenderStrategy.NULL),
            (True, RenderStrategy.SCALAR),
            (3.5, RenderStrategy.SCALAR),
            ("text", RenderStrategy.SCALAR),
            ([], RenderStrategy.EMPTY_ARRAY),
            ([{"a": 1}], RenderStrategy.RECORD_TABLE),
            ([1, 2], RenderStrategy.BULLET_LIST),
            ([{"a": 1}, 2], RenderStrategy.BULLET_LIST),
            ([{}], RenderStrategy.BULLET_LIST),
            ({}, RenderStrategy.EMPTY_OBJECT),
            ({"a": 1, "b": None}, RenderStrategy.FIELD_TABLE),
            ({"a": 1, "b": [1]}, RenderStrategy.SECTIONS),
        ],
    )
    def test_strategy(self, value, expected):
        assert choose_strategy(value) is expected

    def test_column_limit_is_inclusive(self):
        rows = [{f"k{i}": i} for i in range(MAX_TABLE_COLUMNS)]
        assert choose_strategy(rows) is RenderStrategy.RECORD_TABLE

    def test_one_column_over_limit_falls_back_to_list(self):
        rows = [{f"k{i}": i} for i in range(MAX_TABLE_COLUMNS + 1)]
        assert choose_strategy(rows) is RenderStrategy.BULLET_LIST


class TestRecordKeys:
    def test_first_seen_order_across_records(self):
        rows = [{"b": 1, "a": 2}, {"c": 3, "a": 4}, {"d": 5, "b": 6}]
        assert record_keys(rows) == ["b", "a", "c", "d"]


# ---------------------------------------------------------------------------
# Markers and scalars
# ---------------------------------------------------------------------------


class TestMarkers:
    def test_null(self):
        assert render_markdown(None) == f"{NULL_MARKER}\n"
        assert NULL_MARKER == "_null_"

    def test_empty_array(self):
        assert render_markdown([]) == f"{EMPTY_ARRAY_MARKER}\n"

    def test_empty_object(self):
        assert render_markdown({}) == f"{EMPTY_OBJECT_MARKER}\n"


class TestScalars:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("hello", "hello\n"),
            (42, "42\n"),
            (1.0, "1\n"),
            (2.5, "2.5\n"),
            (True, "true\n"),
            (False, "false\n"),
        ],
    )
    def test_scalar_text(self, value, expected):
        assert render_markdown(value) == expected

    def test_markdown_characters_are_not_escaped(self):
        assert render_markdown("a | *b*") == "a | *b*\n"


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------


class TestRecordTable:
    def test_homogeneous_records(self, record_rows):
        assert render_markdown(record_rows) == (
            "| a | b |\n"
            "| --- | --- |\n"
            "| 1 | 2 |\n"
            "| 3 | 4 |\n"
        )

    def test_missing_and_null_cells_are_empty(self):
        rows = [{"a": 1, "b": None}, {"c": "x"}]
        assert render_markdown(rows) == (
            "| a | b | c |\n"
            "| --- | --- | --- |\n"
            "| 1 |  |  |\n"
            "|  |  | x |\n"
        )

    def test_nested_values_are_inlined_as_compact_json(self):
        rows = [{"a": {"x": 1}, "b": [1, 2], "c": True}]
        out = render_markdown(rows)
        assert out.splitlines()[2] == '| `{"x":1}` | `[1,2]` | true |'

    def test_too_many_keys_renders_as_list(self):
        rows = [{f"k{i}": i} for i in range(25)]
        out = render_markdown(rows)
        assert out.startswith("- **[0]**\n")
        assert "| k0 | k1" not in out
        assert out.count("- **[") == 25


class TestFieldTable:
    def test_scalar_only_object(self):
        out = render_markdown({"name": "widget", "count": 3, "note": None, "ok": True})
        assert out == (
            "| Key | Value |\n"
            "| --- | --- |\n"
            "| name | widget |\n"
            "| count | 3 |\n"
            "| note | _null_ |\n"
            "| ok | true |\n"
        )


# ---------------------------------------------------------------------------
# Lists and sections
# ---------------------------------------------------------------------------


class TestBulletList:
    def test_scalars(self):
        assert render_markdown([1, "two", None, False]) == "- 1\n- two\n- null\n- false\n"

    def test_nested_items_are_indexed_and_indented(self):
        out = render_markdown([1, {"a": 1}])
        assert out == (
            "- 1\n"
            "- **[1]**\n"
            "  | Key | Value |\n"
            "  | --- | --- |\n"
            "  | a | 1 |\n"
            "\n"
        )

    def test_nested_empty_object(self):
        assert render_markdown([{}]) == "- **[0]**\n  _empty object_\n\n"

    def test_nested_list(self):
        assert render_markdown([[1, 2]]) == "- **[0]**\n  - 1\n  - 2\n\n"


class TestSections:
    def test_heading_then_recursive_body(self):
        out = render_markdown({"title": "Report", "meta": {"a": 1}})
        assert out == (
            "- **title**: Report\n"
            "# meta\n"
            "\n"
            "| Key | Value |\n"
            "| --- | --- |\n"
            "| a | 1 |\n"
            "\n"
        )

    def test_null_field_uses_marker(self):
        out = render_markdown({"gone": None, "rows": [1]})
        assert out.startswith("- **gone**: _null_\n# rows\n\n- 1\n")

    def test_heading_level_increases_with_depth(self):
        out = render_markdown({"outer": {"inner": {"x": 1}}})
        assert "# outer\n" in out
        assert "## inner\n" in out

    def test_heading_level_is_capped_at_six(self):
        value = {"leaf": 1}
        for i in reversed(range(8)):
            value = {f"k{i}": value}
        out = render_markdown(value)
        assert "###### k5\n" in out
        assert "###### k7\n" in out
        assert "#######" not in out

    def test_key_order_is_preserved(self):
        out = render_markdown({"z": [1], "a": [2]})
        assert out.index("# z") < out.index("# a")


class TestDeterminism:
    def test_same_input_same_output(self):
        value = {"rows": [{"a": 1}, {"b": [1, {"c": None}]}], "n": None}
        assert render_markdown(value) == render_markdown(value)
