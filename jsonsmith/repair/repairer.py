"""JsonRepairer: asks an LLM to fix JSON syntax and reports what changed."""

from __future__ import annotations

import logging
import re

from pydantic import BaseModel

from jsonsmith.convert.values import parse_json
from jsonsmith.diff import ChangeRecord, diff_lines
from jsonsmith.llm.base import LLMProvider
from jsonsmith.llm.models import LLMError
from jsonsmith.repair.prompts import REPAIR_INSTRUCTION

logger = logging.getLogger(__name__)

_LEADING_FENCE = re.compile(r"^```(?:json)?\s*\n?")
_TRAILING_FENCE = re.compile(r"\n?```\s*$")


class RepairError(Exception):
    """The repair call could not be completed."""


class RepairResult(BaseModel):
    fixed: str
    changes: list[ChangeRecord]
    valid: bool


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```/```json fence from model output."""
    text = text.strip()
    text = _LEADING_FENCE.sub("", text)
    text = _TRAILING_FENCE.sub("", text)
    return text.strip()


def _parses(text: str) -> bool:
    try:
        parse_json(text)
    except ValueError:
        return False
    return True


class JsonRepairer:
    """Runs one repair round-trip against an LLM provider.

    No retries happen here; the provider SDK clients retry transient
    failures themselves.
    """

    def __init__(self, llm: LLMProvider) -> None:
        self.llm = llm

    async def repair(self, text: str) -> RepairResult:
        try:
            response = await self.llm.generate(
                REPAIR_INSTRUCTION, text, max_tokens=self.llm.config.max_tokens
            )
        except (LLMError, ValueError) as e:
            raise RepairError(str(e)) from e

        fixed = strip_code_fences(response.content)
        changes = diff_lines(text, fixed)
        logger.info(
            "repair via %s changed %d line(s) (%d in / %d out tokens)",
            response.model,
            len(changes),
            response.usage.input_tokens,
            response.usage.output_tokens,
        )
        return RepairResult(fixed=fixed, changes=changes, valid=_parses(fixed))
