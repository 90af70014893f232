"""Tests for jsonsmith.convert.extractor: JSON from fenced Markdown blocks."""

import json

from jsonsmith.convert.extractor import (
    NO_BLOCKS_MESSAGE,
    NO_VALID_BLOCKS_MESSAGE,
    extract_json_blocks,
    find_code_blocks,
)
from jsonsmith.convert.models import ConversionFailure, ConversionSuccess


class TestFindCodeBlocks:
    def test_tagged_and_untagged_blocks_in_order(self):
        md = "intro\n```json\n{\"x\": 1}\n```\nmid\n```\n[1]\n```\n"
        assert find_code_blocks(md) == ['{"x": 1}', "[1]"]

    def test_block_body_is_stripped(self):
        md = "```json\n\n   {\"x\": 1}   \n\n```"
        assert find_code_blocks(md) == ['{"x": 1}']

    def test_other_language_tag_is_not_a_json_block(self):
        assert find_code_blocks("```python\nprint(1)\n```") == []

    def test_no_blocks(self):
        assert find_code_blocks("# Title\n\nJust prose.") == []


class TestExtractJsonBlocks:
    def test_no_blocks_message(self):
        result = extract_json_blocks("# Title\n\nNo code here.")
        assert isinstance(result, ConversionFailure)
        assert result.message == NO_BLOCKS_MESSAGE
        assert not result.valid

    def test_only_invalid_blocks_message(self):
        result = extract_json_blocks("```json\n{invalid}\n```")
        assert isinstance(result, ConversionFailure)
        assert result.message == NO_VALID_BLOCKS_MESSAGE

    def test_failure_messages_are_distinct(self):
        assert NO_BLOCKS_MESSAGE != NO_VALID_BLOCKS_MESSAGE

    def test_single_valid_block_is_returned_alone(self):
        result = extract_json_blocks('Here:\n```json\n{"x":1}\n```\n')
        assert isinstance(result, ConversionSuccess)
        assert result.text == '{\n  "x": 1\n}'

    def test_multiple_valid_blocks_become_an_array(self):
        md = 'a\n```json\n{"x":1}\n```\nb\n```json\n{"y":2}\n```\n'
        result = extract_json_blocks(md)
        assert isinstance(result, ConversionSuccess)
        assert result.text == json.dumps([{"x": 1}, {"y": 2}], indent=2)

    def test_invalid_blocks_are_skipped(self):
        md = '```json\n{bad}\n```\n```json\n{"ok": true}\n```\n'
        result = extract_json_blocks(md)
        assert isinstance(result, ConversionSuccess)
        assert json.loads(result.text) == {"ok": True}

    def test_untagged_block(self):
        result = extract_json_blocks("```\n[1, 2]\n```")
        assert result.text == "[\n  1,\n  2\n]"
