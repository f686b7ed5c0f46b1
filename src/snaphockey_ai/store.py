"""SQLite-backed key-value persistence with WAL mode.

Holds the last Shot Rater result per identifier (for deep-link recovery),
small preference flags, and the profile image blob. Flat keys, opaque bytes,
no migrations.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from pydantic import ValidationError

from .config import get_config
from .models.shot import ShotAnalysisResult

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv (
    key TEXT PRIMARY KEY,
    value BLOB NOT NULL
);
"""


class KeyValueStore:
    """Synchronous flat key to bytes store.

    Uses WAL mode for concurrent reads and fast single-statement writes.
    """

    def __init__(self, db_path: str | None = None) -> None:
        path = Path(db_path or get_config().store_path).expanduser().resolve()
        path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.execute("PRAGMA synchronous=NORMAL")
        self._conn.executescript(_SCHEMA)

    def get(self, key: str) -> bytes | None:
        row = self._conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        return bytes(row[0]) if row else None

    def set(self, key: str, value: bytes) -> None:
        self._conn.execute("INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)", (key, value))
        self._conn.commit()

    def delete(self, key: str) -> bool:
        """Remove *key*. Returns True if a row was removed."""
        cursor = self._conn.execute("DELETE FROM kv WHERE key = ?", (key,))
        self._conn.commit()
        return cursor.rowcount > 0

    def keys(self, prefix: str = "") -> list[str]:
        escaped = prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        rows = self._conn.execute(
            "SELECT key FROM kv WHERE key LIKE ? ESCAPE '\\' ORDER BY key",
            (f"{escaped}%",),
        ).fetchall()
        return [r[0] for r in rows]

    def close(self) -> None:
        self._conn.close()


class ShotRaterResultStore:
    """Shot Rater results serialized as JSON under ``shotRater.result.<id>``."""

    PREFIX = "shotRater.result."

    def __init__(self, kv: KeyValueStore) -> None:
        self.kv = kv

    def _key(self, result_id: str) -> str:
        return f"{self.PREFIX}{result_id}"

    def save(self, result: ShotAnalysisResult, result_id: str) -> bool:
        try:
            self.kv.set(self._key(result_id), result.model_dump_json().encode())
        except sqlite3.Error:
            logger.warning("Failed to save shot result %s", result_id, exc_info=True)
            return False
        return True

    def load(self, result_id: str) -> ShotAnalysisResult | None:
        """Return the stored result, or None when missing or unreadable."""
        try:
            raw = self.kv.get(self._key(result_id))
        except sqlite3.Error:
            logger.warning("Failed to read shot result %s", result_id, exc_info=True)
            return None
        if raw is None:
            return None
        try:
            return ShotAnalysisResult.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning("Discarding unreadable shot result %s: %s", result_id, exc)
            return None

    def delete(self, result_id: str) -> bool:
        return self.kv.delete(self._key(result_id))

    def ids(self) -> list[str]:
        return [key[len(self.PREFIX) :] for key in self.kv.keys(self.PREFIX)]


class Preferences:
    """Small per-install flags and the profile image."""

    TUTORIAL_SEEN_KEY = "shotRater.tutorialSeen"
    PROFILE_IMAGE_KEY = "profile.image"

    def __init__(self, kv: KeyValueStore) -> None:
        self.kv = kv

    @property
    def tutorial_seen(self) -> bool:
        return self.kv.get(self.TUTORIAL_SEEN_KEY) == b"1"

    @tutorial_seen.setter
    def tutorial_seen(self, value: bool) -> None:
        self.kv.set(self.TUTORIAL_SEEN_KEY, b"1" if value else b"0")

    def save_profile_image(self, data: bytes) -> None:
        self.kv.set(self.PROFILE_IMAGE_KEY, data)

    def load_profile_image(self) -> bytes | None:
        return self.kv.get(self.PROFILE_IMAGE_KEY)

    def delete_profile_image(self) -> bool:
        return self.kv.delete(self.PROFILE_IMAGE_KEY)
