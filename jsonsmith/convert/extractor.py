"""Markdown -> JSON: pull JSON out of fenced code blocks."""

from __future__ import annotations

import logging
import re

from jsonsmith.convert.models import ConversionFailure, ConversionResult, ConversionSuccess
from jsonsmith.convert.values import JSONValue, parse_json, pretty_json

logger = logging.getLogger(__name__)

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*\n([\s\S]*?)```")

NO_BLOCKS_MESSAGE = "No JSON code blocks found in markdown"
NO_VALID_BLOCKS_MESSAGE = "No valid JSON found in code blocks"


def find_code_blocks(markdown: str) -> list[str]:
    """Return the stripped bodies of all fenced blocks, in document order."""
    return [m.group(1).strip() for m in _FENCED_BLOCK.finditer(markdown)]


def _parse_or_none(block: str) -> tuple[bool, JSONValue]:
    try:
        return True, parse_json(block)
    except ValueError as e:
        logger.debug("skipping invalid code block: %s", e)
        return False, None


def extract_json_blocks(markdown: str) -> ConversionResult:
    """Collect every fenced block that parses as JSON.

    Invalid blocks are dropped. One valid block is returned on its own;
    several are returned as a JSON array in document order.
    """
    blocks = find_code_blocks(markdown)
    if not blocks:
        return ConversionFailure(message=NO_BLOCKS_MESSAGE)

    parsed = [_parse_or_none(block) for block in blocks]
    values = [value for ok, value in parsed if ok]
    if not values:
        return ConversionFailure(message=NO_VALID_BLOCKS_MESSAGE)

    logger.debug("extracted %d of %d code blocks", len(values), len(blocks))
    if len(values) == 1:
        return ConversionSuccess(text=pretty_json(values[0]))
    return ConversionSuccess(text=pretty_json(values))
