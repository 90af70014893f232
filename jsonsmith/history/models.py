"""Pydantic models for saved history entries."""

from __future__ import annotations

import re
from datetime import datetime

from pydantic import BaseModel

_WHITESPACE = re.compile(r"\s+")


class HistoryEntry(BaseModel):
    id: str
    content: str
    formatted: str
    timestamp: datetime
    label: str


def make_label(content: str, length: int = 50) -> str:
    """Short one-line label: whitespace runs collapsed, cut to ``length`` chars."""
    return _WHITESPACE.sub(" ", content)[:length]
