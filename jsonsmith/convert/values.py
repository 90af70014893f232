"""The JSON value model and the parse/encode primitives every converter shares.

Numbers follow the JavaScript number model: a number with no fractional part
is an integer whichever way it was written (``1.0``, ``1e5``), and values that
overflow a double become null.
"""

from __future__ import annotations

import json
import math
from typing import Any, Union

JSONValue = Union[None, bool, int, float, str, list[Any], dict[str, Any]]

NESTING_TOO_DEEP = "Maximum nesting depth exceeded"

# JSON.stringify switches to exponent notation outside this range
_MAX_POSITIONAL = 1e21
_MIN_POSITIONAL_EXP = -7


def _reject_constant(name: str) -> float:
    # json accepts NaN/Infinity by default; standard JSON does not.
    raise ValueError(f"Unexpected token {name} in JSON")


def normalize_number(value: float) -> int | float | None:
    """Collapse integral floats to int; non-finite values become None."""
    if not math.isfinite(value):
        return None
    if value.is_integer() and abs(value) < _MAX_POSITIONAL:
        return int(value)
    return value


def _parse_float(text: str) -> int | float | None:
    return normalize_number(float(text))


def parse_json(text: str) -> JSONValue:
    """Parse standard JSON text.

    Raises ValueError (incl. JSONDecodeError) on bad input, and on input
    nested deeper than the interpreter can decode.
    """
    try:
        return json.loads(text, parse_float=_parse_float, parse_constant=_reject_constant)
    except RecursionError as e:
        raise ValueError(NESTING_TOO_DEEP) from e


def is_container(value: Any) -> bool:
    return isinstance(value, (dict, list))


def number_text(value: float) -> str:
    """Spell a float the way JSON.stringify does (``1e-7``, ``0.00001``, ``1e+21``)."""
    text = repr(value)
    if "e" not in text:
        return text
    mantissa, exponent = text.split("e")
    exp = int(exponent)
    if _MIN_POSITIONAL_EXP < exp < 0:
        sign = "-" if mantissa.startswith("-") else ""
        digits = mantissa.lstrip("-").replace(".", "")
        return f"{sign}0.{'0' * (-exp - 1)}{digits}"
    return f"{mantissa}e{'+' if exp > 0 else '-'}{abs(exp)}"


def scalar_text(value: Any) -> str:
    """Textual form of a scalar, written the way JSON spells it."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        normalized = normalize_number(value)
        if normalized is None:
            return "null"
        if isinstance(normalized, int):
            return str(normalized)
        return number_text(normalized)
    return str(value)


def compact_json(value: JSONValue) -> str:
    """Single-line encoding with no insignificant whitespace."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def pretty_json(value: JSONValue, indent: int | str = 2) -> str:
    return json.dumps(value, indent=indent, ensure_ascii=False)
