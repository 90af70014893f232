"""History store backed by a local SQLite database."""

from __future__ import annotations

import logging
import sqlite3
import threading
import uuid
from datetime import UTC, datetime
from pathlib import Path

from jsonsmith.config.models import HistoryConfig
from jsonsmith.history.models import HistoryEntry, make_label

logger = logging.getLogger(__name__)

_SCHEMA = """\
CREATE TABLE IF NOT EXISTS history (
    id TEXT PRIMARY KEY,
    content TEXT NOT NULL,
    formatted TEXT NOT NULL,
    timestamp TEXT NOT NULL,
    label TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_history_timestamp ON history(timestamp DESC);
"""

_COLUMNS = "id, content, formatted, timestamp, label"


class SQLiteHistoryStore:
    """Stores saved documents in SQLite with WAL mode.

    One connection is shared across threads (FastAPI runs sync handlers in
    a threadpool), so every statement goes through ``self._lock``.
    """

    def __init__(self, db_path: str = ".jsonsmith/history.db", label_length: int = 50) -> None:
        path = Path(db_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        self.db_path = str(path)
        self.label_length = label_length
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(
            self.db_path, isolation_level=None, timeout=5, check_same_thread=False
        )
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)

    # -- helpers ---------------------------------------------------------------

    @staticmethod
    def _row_to_entry(row: tuple) -> HistoryEntry:
        id_, content, formatted, timestamp, label = row
        return HistoryEntry(
            id=id_,
            content=content,
            formatted=formatted,
            timestamp=datetime.fromisoformat(timestamp),
            label=label,
        )

    # -- public API ------------------------------------------------------------

    def add(self, content: str, formatted: str | None = None) -> HistoryEntry:
        """Save a document. ``formatted`` defaults to ``content``."""
        entry = HistoryEntry(
            id=uuid.uuid4().hex,
            content=content,
            formatted=formatted or content,
            timestamp=datetime.now(UTC),
            label=make_label(content, self.label_length),
        )
        with self._lock:
            self._conn.execute(
                f"INSERT INTO history ({_COLUMNS}) VALUES (?, ?, ?, ?, ?)",
                (
                    entry.id,
                    entry.content,
                    entry.formatted,
                    entry.timestamp.isoformat(),
                    entry.label,
                ),
            )
        logger.debug("saved history entry %s", entry.id)
        return entry

    def list_recent(self, limit: int = 50) -> list[HistoryEntry]:
        """Return up to ``limit`` entries, newest first."""
        with self._lock:
            rows = self._conn.execute(
                f"SELECT {_COLUMNS} FROM history ORDER BY timestamp DESC, rowid DESC LIMIT ?",
                (limit,),
            ).fetchall()
        return [self._row_to_entry(r) for r in rows]

    def delete(self, entry_id: str) -> bool:
        """Delete an entry. Returns False when no such entry existed."""
        with self._lock:
            cursor = self._conn.execute("DELETE FROM history WHERE id = ?", (entry_id,))
        return cursor.rowcount > 0

    def close(self) -> None:
        with self._lock:
            self._conn.close()


def open_history_store(config: HistoryConfig) -> SQLiteHistoryStore | None:
    """Open the configured store, or return None when history is off or unavailable."""
    if not config.enabled:
        logger.info("history disabled by config")
        return None
    try:
        return SQLiteHistoryStore(config.db_path, label_length=config.label_length)
    except (sqlite3.Error, OSError) as e:
        logger.warning("history store not available, history disabled: %s", e)
        return None
