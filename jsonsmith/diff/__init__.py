"""Positional line diff."""

from jsonsmith.diff.lines import ChangeRecord, diff_lines

__all__ = ["ChangeRecord", "diff_lines"]
