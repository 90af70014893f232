"""Conversion facade: parse -> transform -> serialize, one function per direction.

Every function returns a ``ConversionResult`` and never raises for bad
input. Failure messages carry the parser or codec diagnostic verbatim.
"""

from __future__ import annotations

import logging

import yaml

from jsonsmith.config.models import YamlSettings
from jsonsmith.convert.extractor import extract_json_blocks
from jsonsmith.convert.markdown import render_markdown
from jsonsmith.convert.models import ConversionFailure, ConversionResult, ConversionSuccess
from jsonsmith.convert.values import NESTING_TOO_DEEP, compact_json, parse_json, pretty_json
from jsonsmith.convert.yaml_bridge import dump_yaml, load_yaml_as_json

logger = logging.getLogger(__name__)

TAB = "tab"
MAX_INDENT_WIDTH = 10

IndentSpec = int | str


def normalize_indent(indent: IndentSpec) -> int | str:
    """Map an indent spec to a json.dumps indent: "\\t", or a width in 0..10.

    Non-numeric strings count as width 0 (compact output).
    """
    if indent == TAB:
        return "\t"
    try:
        width = int(indent)
    except (TypeError, ValueError):
        return 0
    return max(0, min(width, MAX_INDENT_WIDTH))


def format_json(text: str, indent: IndentSpec = 2) -> ConversionResult:
    try:
        value = parse_json(text)
        spec = normalize_indent(indent)
        if spec == 0:
            return ConversionSuccess(text=compact_json(value))
        return ConversionSuccess(text=pretty_json(value, spec))
    except ValueError as e:
        return ConversionFailure(message=str(e))
    except RecursionError:
        return ConversionFailure(message=NESTING_TOO_DEEP)


def minify_json(text: str) -> ConversionResult:
    try:
        return ConversionSuccess(text=compact_json(parse_json(text)))
    except ValueError as e:
        return ConversionFailure(message=str(e))
    except RecursionError:
        return ConversionFailure(message=NESTING_TOO_DEEP)


def json_to_markdown(text: str) -> ConversionResult:
    try:
        return ConversionSuccess(text=render_markdown(parse_json(text)))
    except ValueError as e:
        return ConversionFailure(message=str(e))
    except RecursionError:
        # the renderer recurses once per nesting level
        return ConversionFailure(message=NESTING_TOO_DEEP)


def markdown_to_json(markdown: str) -> ConversionResult:
    try:
        return extract_json_blocks(markdown)
    except RecursionError:
        return ConversionFailure(message=NESTING_TOO_DEEP)


def json_to_yaml(text: str, *, indent: int = 2, line_width: int = 120) -> ConversionResult:
    try:
        value = parse_json(text)
        return ConversionSuccess(text=dump_yaml(value, indent=indent, line_width=line_width))
    except (ValueError, yaml.YAMLError) as e:
        return ConversionFailure(message=str(e))
    except RecursionError:
        return ConversionFailure(message=NESTING_TOO_DEEP)


def yaml_to_json(yaml_text: str) -> ConversionResult:
    try:
        return ConversionSuccess(text=load_yaml_as_json(yaml_text))
    except (yaml.YAMLError, TypeError, ValueError) as e:
        return ConversionFailure(message=str(e))


class ConversionFacade:
    """Binds the conversion functions to YAML settings and logs failures."""

    def __init__(self, yaml_settings: YamlSettings | None = None) -> None:
        self.yaml_settings = yaml_settings or YamlSettings()

    def format(self, text: str, indent: IndentSpec = 2) -> ConversionResult:
        return self._logged("format", format_json(text, indent))

    def minify(self, text: str) -> ConversionResult:
        return self._logged("minify", minify_json(text))

    def to_markdown(self, text: str) -> ConversionResult:
        return self._logged("to_markdown", json_to_markdown(text))

    def from_markdown(self, markdown: str) -> ConversionResult:
        return self._logged("from_markdown", markdown_to_json(markdown))

    def to_yaml(self, text: str) -> ConversionResult:
        result = json_to_yaml(
            text,
            indent=self.yaml_settings.indent,
            line_width=self.yaml_settings.line_width,
        )
        return self._logged("to_yaml", result)

    def from_yaml(self, yaml_text: str) -> ConversionResult:
        return self._logged("from_yaml", yaml_to_json(yaml_text))

    @staticmethod
    def _logged(operation: str, result: ConversionResult) -> ConversionResult:
        if isinstance(result, ConversionFailure):
            logger.debug("%s failed: %s", operation, result.message)
        return result
