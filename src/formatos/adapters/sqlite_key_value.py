from __future__ import annotations

import sqlite3
from datetime import datetime, timezone

from formatos.ports.key_value_port import KeyValuePort


class SQLiteKeyValueStore(KeyValuePort):
    def __init__(self, sqlite_path: str) -> None:
        self._sqlite_path = sqlite_path
        self._ensure_schema()

    def get(self, key: str) -> str | None:
        try:
            with self._connect() as conn:
                row = conn.execute(
                    """
                    SELECT value
                    FROM kv_store
                    WHERE key = ?
                    """,
                    (key,),
                ).fetchone()
            if row is None:
                return None
            return row[0]
        except sqlite3.Error as exc:
            raise RuntimeError(f"Failed to read key: {key}") from exc

    def set(self, key: str, value: str) -> None:
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT INTO kv_store(key, value, updated_at)
                    VALUES (?, ?, ?)
                    ON CONFLICT(key)
                    DO UPDATE SET
                        value = excluded.value,
                        updated_at = excluded.updated_at
                    """,
                    (key, value, datetime.now(timezone.utc).isoformat()),
                )
        except sqlite3.Error as exc:
            raise RuntimeError(f"Failed to write key: {key}") from exc

    def items(self) -> list[tuple[str, str, str]]:
        try:
            with self._connect() as conn:
                rows = conn.execute(
                    """
                    SELECT key, value, updated_at
                    FROM kv_store
                    ORDER BY key
                    """
                ).fetchall()
            return [(row[0], row[1], row[2]) for row in rows]
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to list keys") from exc

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self._sqlite_path)

    def _ensure_schema(self) -> None:
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS kv_store (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL,
                        updated_at TEXT NOT NULL
                    )
                    """
                )
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to initialize key-value store") from exc


class InMemoryKeyValueStore(KeyValuePort):
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value
