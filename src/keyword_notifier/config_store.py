"""SQLite backed storage for Keyword Notifier settings."""

from __future__ import annotations

import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Iterator

from .settings import SETTINGS
from .utils import parse_bool

_DB_PRAGMA = "PRAGMA journal_mode=WAL;" "PRAGMA synchronous=NORMAL;"


class ConfigStore:
    """Persisted plugin settings.

    Values are stored as text. Writes are validated against :data:`SETTINGS`;
    reads never fail so a hand-edited database cannot break event handling.
    """

    def __init__(self, path: Path | str):
        self._path = path
        self._conn = sqlite3.connect(str(self._path))
        self._conn.row_factory = sqlite3.Row
        self._setup()

    # ------------------------------------------------------------------
    # Schema initialisation
    # ------------------------------------------------------------------
    def _setup(self) -> None:
        with closing(self._conn.cursor()) as cur:
            for statement in _DB_PRAGMA.split(";"):
                if statement.strip():
                    cur.execute(statement)
            cur.executescript(
                """
                CREATE TABLE IF NOT EXISTS settings (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                );
                """
            )
            self._conn.commit()

    def close(self) -> None:
        self._conn.close()

    # ------------------------------------------------------------------
    # Basic settings
    # ------------------------------------------------------------------
    def set_setting(self, key: str, value: str) -> None:
        definition = SETTINGS.get(key)
        if definition is None:
            raise ValueError(f"Unknown setting: {key}")
        normalized = definition.validate(value)
        with closing(self._conn.cursor()) as cur:
            cur.execute(
                "INSERT INTO settings(key, value) VALUES(?, ?)"
                " ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                (key, normalized),
            )
            self._conn.commit()

    def get_setting(self, key: str, default: str | None = None) -> str | None:
        with closing(self._conn.cursor()) as cur:
            cur.execute("SELECT value FROM settings WHERE key=?", (key,))
            row = cur.fetchone()
        return row["value"] if row else default

    def delete_setting(self, key: str) -> None:
        with closing(self._conn.cursor()) as cur:
            cur.execute("DELETE FROM settings WHERE key=?", (key,))
            self._conn.commit()

    def iter_settings(self, prefix: str | None = None) -> Iterator[tuple[str, str]]:
        query = "SELECT key, value FROM settings"
        params: tuple[str, ...] = ()
        if prefix:
            query += " WHERE key LIKE ?"
            params = (f"{prefix}%",)
        query += " ORDER BY key"
        with closing(self._conn.cursor()) as cur:
            cur.execute(query, params)
            rows = cur.fetchall()
        for row in rows:
            yield str(row["key"]), str(row["value"])

    # ------------------------------------------------------------------
    # Typed accessors
    # ------------------------------------------------------------------
    def get_bool(self, key: str) -> bool:
        definition = SETTINGS[key]
        default = definition.default == "true"
        return parse_bool(self.get_setting(key), default)

    def get_choice(self, key: str) -> str:
        definition = SETTINGS[key]
        value = (self.get_setting(key) or "").strip()
        if value in definition.options:
            return value
        return definition.default
