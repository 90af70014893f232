"""Structured-text conversion: JSON <-> Markdown, JSON <-> YAML, formatting."""

from jsonsmith.convert.extractor import extract_json_blocks
from jsonsmith.convert.facade import (
    ConversionFacade,
    format_json,
    json_to_markdown,
    json_to_yaml,
    markdown_to_json,
    minify_json,
    yaml_to_json,
)
from jsonsmith.convert.markdown import RenderStrategy, choose_strategy, render_markdown
from jsonsmith.convert.models import ConversionFailure, ConversionResult, ConversionSuccess
from jsonsmith.convert.values import JSONValue, parse_json

__all__ = [
    "ConversionFacade",
    "ConversionFailure",
    "ConversionResult",
    "ConversionSuccess",
    "JSONValue",
    "RenderStrategy",
    "choose_strategy",
    "extract_json_blocks",
    "format_json",
    "json_to_markdown",
    "json_to_yaml",
    "markdown_to_json",
    "minify_json",
    "parse_json",
    "render_markdown",
    "yaml_to_json",
]
