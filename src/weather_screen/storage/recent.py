from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Any

from ..domain.models import CURRENT_LOCATION_LABEL
from .kv import get_value, set_value

LOGGER = logging.getLogger(__name__)

RECENT_SEARCHES_KEY = "search.recent"
DEFAULT_RECENT_LIMIT = 5


def push_recent(entries: list[str], label: str, *, limit: int = DEFAULT_RECENT_LIMIT) -> list[str]:
    """Return ``entries`` with ``label`` moved (or added) to the front, capped at ``limit``."""
    if label == CURRENT_LOCATION_LABEL:
        return list(entries)
    return [label, *(entry for entry in entries if entry != label)][:limit]


def _sanitize(raw: Any, *, limit: int) -> list[str]:
    if not isinstance(raw, list):
        return []
    entries: list[str] = []
    for item in raw:
        if not isinstance(item, str):
            continue
        text = item.strip()
        if not text or text == CURRENT_LOCATION_LABEL:
            continue
        entries.append(text)
    return list(dict.fromkeys(entries))[:limit]


class RecentSearchStore:
    """Most-recent-first list of searched display labels, mirrored to SQLite."""

    def __init__(
        self,
        db_path: Path,
        *,
        key: str = RECENT_SEARCHES_KEY,
        limit: int = DEFAULT_RECENT_LIMIT,
    ) -> None:
        self._db_path = db_path
        self._key = key
        self._limit = limit
        self._entries: list[str] = []

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    def load(self) -> list[str]:
        try:
            raw = get_value(self._db_path, self._key)
        except (sqlite3.Error, OSError, ValueError):
            LOGGER.exception("Failed to load recent searches")
            raw = None
        self._entries = _sanitize(raw, limit=self._limit)
        return self.entries

    def push(self, label: str) -> list[str]:
        updated = push_recent(self._entries, label, limit=self._limit)
        if updated == self._entries:
            return self.entries

        self._entries = updated
        try:
            set_value(self._db_path, self._key, updated)
        except (sqlite3.Error, OSError):
            LOGGER.exception("Failed to save recent searches")
        return self.entries
