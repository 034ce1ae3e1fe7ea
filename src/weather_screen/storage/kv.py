from __future__ import annotations

import json
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator

KV_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_entries (
    key TEXT PRIMARY KEY,
    json TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
"""


@contextmanager
def kv_connection(db_path: Path) -> Iterator[sqlite3.Connection]:
    """Open the key-value database, creating its directory and table on first use."""
    path = Path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    connection = sqlite3.connect(path)
    connection.row_factory = sqlite3.Row
    try:
        connection.execute("PRAGMA journal_mode = WAL;")
        connection.executescript(KV_SCHEMA)
        yield connection
    finally:
        connection.close()


def initialize_database(db_path: Path) -> None:
    with kv_connection(db_path):
        pass


def set_value(db_path: Path, key: str, value: Any) -> None:
    value_json = json.dumps(value, ensure_ascii=True, separators=(",", ":"))
    updated_at = datetime.now(timezone.utc).isoformat()

    with kv_connection(db_path) as connection:
        connection.execute(
            """
            INSERT INTO kv_entries (key, json, updated_at)
            VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET
                json=excluded.json,
                updated_at=excluded.updated_at
            """,
            (key, value_json, updated_at),
        )
        connection.commit()


def get_value(db_path: Path, key: str) -> Any | None:
    with kv_connection(db_path) as connection:
        row = connection.execute("SELECT json FROM kv_entries WHERE key = ?", (key,)).fetchone()

    if row is None:
        return None
    return json.loads(row["json"])
