"""Saved-document history."""

from jsonsmith.history.models import HistoryEntry, make_label
from jsonsmith.history.store import SQLiteHistoryStore, open_history_store

__all__ = [
    "HistoryEntry",
    "SQLiteHistoryStore",
    "make_label",
    "open_history_store",
]
