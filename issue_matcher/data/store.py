"""Local settings store — SQLite at ~/.issue-matcher/data.db."""

from __future__ import annotations

import os
import sqlite3
from pathlib import Path
from typing import Optional


_DEFAULT_DB_PATH = os.path.join(
    str(Path.home()), ".issue-matcher", "data.db"
)

_SCHEMA = """\
CREATE TABLE IF NOT EXISTS config (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);

INSERT OR IGNORE INTO config (key, value) VALUES ('strategy', 'exact');
"""


class DataStore:
    """Local SQLite settings store."""

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path or _DEFAULT_DB_PATH
        os.makedirs(os.path.dirname(self.db_path), exist_ok=True)
        self._conn: Optional[sqlite3.Connection] = None
        self._init_db()

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = sqlite3.connect(self.db_path)
            self._conn.row_factory = sqlite3.Row
        return self._conn

    def _init_db(self) -> None:
        conn = self._get_conn()
        conn.executescript(_SCHEMA)
        conn.commit()

    def close(self) -> None:
        if self._conn:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> DataStore:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # ── Config ───────────────────────────────────────────────────────

    def get_config(self, key: str) -> Optional[str]:
        conn = self._get_conn()
        row = conn.execute(
            "SELECT value FROM config WHERE key = ?", (key,)
        ).fetchone()
        return row["value"] if row else None

    def set_config(self, key: str, value: str) -> None:
        conn = self._get_conn()
        conn.execute(
            "INSERT OR REPLACE INTO config (key, value) VALUES (?, ?)",
            (key, value),
        )
        conn.commit()

    def delete_config(self, key: str) -> None:
        conn = self._get_conn()
        conn.execute("DELETE FROM config WHERE key = ?", (key,))
        conn.commit()

    def all_config(self) -> dict[str, str]:
        conn = self._get_conn()
        rows = conn.execute(
            "SELECT key, value FROM config ORDER BY key"
        ).fetchall()
        return {row["key"]: row["value"] for row in rows}
