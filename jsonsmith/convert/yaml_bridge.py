"""JSON <-> YAML via PyYAML, order-preserving and alias-free."""

from __future__ import annotations

import datetime as dt
from typing import Any

import yaml

from jsonsmith.convert.values import (
    NESTING_TOO_DEEP,
    JSONValue,
    normalize_number,
    pretty_json,
    scalar_text,
)


class NoAliasDumper(yaml.SafeDumper):
    """SafeDumper that never emits anchors or aliases."""

    def ignore_aliases(self, data: Any) -> bool:
        return True


def dump_yaml(value: JSONValue, *, indent: int = 2, line_width: int = 120) -> str:
    return yaml.dump(
        value,
        Dumper=NoAliasDumper,
        indent=indent,
        width=line_width,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )


def iso_timestamp(value: dt.date) -> str:
    """ISO-8601 in UTC with millisecond precision, e.g. ``2024-01-15T00:00:00.000Z``.

    Bare dates are midnight UTC; naive datetimes are taken as UTC.
    """
    if not isinstance(value, dt.datetime):
        value = dt.datetime(value.year, value.month, value.day)
    if value.tzinfo is not None:
        value = value.astimezone(dt.timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def to_json_value(data: Any) -> JSONValue:
    """Map safe_load output onto JSON values.

    Timestamps become ISO strings, ``.nan``/``.inf`` become null, integral
    floats become ints, and non-string mapping keys are stringified.
    """
    if isinstance(data, dict):
        return {_key_text(k): to_json_value(v) for k, v in data.items()}
    if isinstance(data, list):
        return [to_json_value(v) for v in data]
    if isinstance(data, float):
        return normalize_number(data)
    if isinstance(data, dt.date):
        return iso_timestamp(data)
    if isinstance(data, bytes):
        raise TypeError("Binary YAML values have no JSON form")
    return data


def _key_text(key: Any) -> str:
    if isinstance(key, str):
        return key
    if key is None or isinstance(key, (bool, int, float)):
        return scalar_text(key)
    if isinstance(key, dt.date):
        return iso_timestamp(key)
    raise TypeError(f"Unsupported mapping key type: {type(key).__name__}")


def load_yaml_as_json(text: str, *, indent: int = 2) -> str:
    """Load YAML and re-encode it as JSON.

    Raises yaml.YAMLError on bad input and ValueError on input nested
    deeper than the interpreter can walk.
    """
    try:
        return pretty_json(to_json_value(yaml.safe_load(text)), indent)
    except RecursionError as e:
        raise ValueError(NESTING_TOO_DEEP) from e
