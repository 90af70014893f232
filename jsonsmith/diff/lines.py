"""Index-aligned line comparison between two texts."""

from __future__ import annotations

from itertools import zip_longest

from pydantic import BaseModel, Field


class ChangeRecord(BaseModel):
    """One line position where the two texts disagree."""

    line_number: int = Field(ge=1, serialization_alias="line")
    original: str = ""
    revised: str = Field(default="", serialization_alias="fixed")


def diff_lines(original: str, revised: str) -> list[ChangeRecord]:
    """Compare ``original`` and ``revised`` line by line, by position.

    This is not an edit-distance diff. Lines are paired by index, and a
    line missing from the shorter text compares as "". Inserting or
    deleting one line therefore marks every later line as changed.
    """
    pairs = zip_longest(original.split("\n"), revised.split("\n"), fillvalue="")
    return [
        ChangeRecord(line_number=i, original=a, revised=b)
        for i, (a, b) in enumerate(pairs, start=1)
        if a != b
    ]
