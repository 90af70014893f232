"""JSON -> Markdown rendering.

A value is classified into a ``RenderStrategy`` by an ordered list of
predicates, then dispatched to the matching renderer. Arrays of similar
records become tables, scalar-only objects become key/value tables, and
anything nested falls back to headings and bullet lists.

Scalar text is emitted as-is: Markdown special characters (``|``, ``*``,
``_``...) are not escaped, so a ``|`` inside a value breaks its table row.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any

from jsonsmith.convert.values import JSONValue, compact_json, is_container, scalar_text

MAX_HEADING_DEPTH = 6
MAX_TABLE_COLUMNS = 20

NULL_MARKER = "_null_"
EMPTY_ARRAY_MARKER = "_empty array_"
EMPTY_OBJECT_MARKER = "_empty object_"


class RenderStrategy(str, Enum):
    NULL = "null"
    SCALAR = "scalar"
    EMPTY_ARRAY = "empty_array"
    RECORD_TABLE = "record_table"
    BULLET_LIST = "bullet_list"
    EMPTY_OBJECT = "empty_object"
    FIELD_TABLE = "field_table"
    SECTIONS = "sections"


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def record_keys(items: list[Any]) -> list[str]:
    """Union of keys across records, in first-seen order."""
    seen: dict[str, None] = {}
    for item in items:
        for key in item:
            seen.setdefault(key, None)
    return list(seen)


def _is_null(value: Any) -> bool:
    return value is None


def _is_scalar(value: Any) -> bool:
    return not is_container(value)


def _is_empty_array(value: Any) -> bool:
    return isinstance(value, list) and not value


def _is_record_array(value: Any) -> bool:
    if not isinstance(value, list) or not value:
        return False
    if not all(isinstance(item, dict) for item in value):
        return False
    return 1 <= len(record_keys(value)) <= MAX_TABLE_COLUMNS


def _is_array(value: Any) -> bool:
    return isinstance(value, list)


def _is_empty_object(value: Any) -> bool:
    return isinstance(value, dict) and not value


def _is_flat_object(value: Any) -> bool:
    return isinstance(value, dict) and not any(is_container(v) for v in value.values())


_RULES: list[tuple[Callable[[Any], bool], RenderStrategy]] = [
    (_is_null, RenderStrategy.NULL),
    (_is_scalar, RenderStrategy.SCALAR),
    (_is_empty_array, RenderStrategy.EMPTY_ARRAY),
    (_is_record_array, RenderStrategy.RECORD_TABLE),
    (_is_array, RenderStrategy.BULLET_LIST),
    (_is_empty_object, RenderStrategy.EMPTY_OBJECT),
    (_is_flat_object, RenderStrategy.FIELD_TABLE),
]


def choose_strategy(value: JSONValue) -> RenderStrategy:
    """Return the first strategy whose predicate accepts ``value``."""
    for predicate, strategy in _RULES:
        if predicate(value):
            return strategy
    return RenderStrategy.SECTIONS


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------


def _table_row(cells: list[str]) -> str:
    return "| " + " | ".join(cells) + " |\n"


def _record_cell(value: Any) -> str:
    if value is None:
        return ""
    if is_container(value):
        return f"`{compact_json(value)}`"
    return scalar_text(value)


def _field_text(value: Any) -> str:
    return NULL_MARKER if value is None else scalar_text(value)


def _indent_block(text: str) -> str:
    return "\n".join("  " + line if line else "" for line in text.split("\n"))


def _render_record_table(items: list[dict[str, Any]], depth: int) -> str:
    keys = record_keys(items)
    out = [_table_row(keys), _table_row(["---"] * len(keys))]
    for item in items:
        out.append(_table_row([_record_cell(item.get(k)) for k in keys]))
    return "".join(out)


def _render_bullet_list(items: list[Any], depth: int) -> str:
    out = []
    for i, item in enumerate(items):
        if is_container(item):
            out.append(f"- **[{i}]**\n" + _indent_block(render_markdown(item, depth + 1)) + "\n")
        else:
            out.append(f"- {scalar_text(item)}\n")
    return "".join(out)


def _render_field_table(obj: dict[str, Any], depth: int) -> str:
    out = ["| Key | Value |\n| --- | --- |\n"]
    for key, value in obj.items():
        out.append(f"| {key} | {_field_text(value)} |\n")
    return "".join(out)


def _render_sections(obj: dict[str, Any], depth: int) -> str:
    prefix = "#" * min(depth + 1, MAX_HEADING_DEPTH)
    out = []
    for key, value in obj.items():
        if is_container(value):
            out.append(f"{prefix} {key}\n\n{render_markdown(value, depth + 1)}\n")
        else:
            out.append(f"- **{key}**: {_field_text(value)}\n")
    return "".join(out)


_RENDERERS: dict[RenderStrategy, Callable[[Any, int], str]] = {
    RenderStrategy.NULL: lambda value, depth: NULL_MARKER + "\n",
    RenderStrategy.SCALAR: lambda value, depth: scalar_text(value) + "\n",
    RenderStrategy.EMPTY_ARRAY: lambda value, depth: EMPTY_ARRAY_MARKER + "\n",
    RenderStrategy.RECORD_TABLE: _render_record_table,
    RenderStrategy.BULLET_LIST: _render_bullet_list,
    RenderStrategy.EMPTY_OBJECT: lambda value, depth: EMPTY_OBJECT_MARKER + "\n",
    RenderStrategy.FIELD_TABLE: _render_field_table,
    RenderStrategy.SECTIONS: _render_sections,
}


def render_markdown(value: JSONValue, depth: int = 0) -> str:
    """Render a parsed JSON value as a Markdown document.

    ``depth`` only affects heading levels, which are capped at
    ``MAX_HEADING_DEPTH``.
    """
    return _RENDERERS[choose_strategy(value)](value, depth)
