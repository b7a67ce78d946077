"""SITEFEATURES FILE PURPOSE
Purpose: concrete flag stores (memory, env-seeded, SQLite) for the registry.
Hot path: low (one read per toggle/status call; one write per transition).
Feature flags: SITE_FLAG_STORE, SITE_FLAG_DB_PATH, SITE_FEATURE_*.
Failure mode: unknown ids read as disabled; sqlite errors propagate to caller.
"""

from __future__ import annotations

import re
import sqlite3
import time
from pathlib import Path

from sitefeatures.config import env_flag, flag_db_path, flag_store_backend
from sitefeatures.feature import FlagStore

ENV_PREFIX = "SITE_FEATURE_"

_NON_ALNUM_RE = re.compile(r"[^A-Z0-9]+")


def _validate_id(feature_id: str) -> None:
    if not isinstance(feature_id, str) or not feature_id.strip():
        raise ValueError("feature_id is required")


class MemoryFlagStore:
    def __init__(self, initial: dict[str, bool] | None = None) -> None:
        self._flags: dict[str, bool] = dict(initial or {})

    def get_enabled(self, feature_id: str) -> bool:
        return self._flags.get(feature_id, False)

    def set_enabled(self, feature_id: str, enabled: bool) -> None:
        self._flags[feature_id] = bool(enabled)


def env_name_for(feature_id: str, prefix: str = ENV_PREFIX) -> str:
    return prefix + _NON_ALNUM_RE.sub("_", feature_id.upper()).strip("_")


class EnvFlagStore:
    """Seeds flags from SITE_FEATURE_<ID>; runtime writes live in-process only."""

    def __init__(self, prefix: str = ENV_PREFIX) -> None:
        self.prefix = prefix
        self._overrides: dict[str, bool] = {}

    def get_enabled(self, feature_id: str) -> bool:
        if feature_id in self._overrides:
            return self._overrides[feature_id]
        if not feature_id:
            return False
        return env_flag(env_name_for(feature_id, self.prefix), "0")

    def set_enabled(self, feature_id: str, enabled: bool) -> None:
        self._overrides[feature_id] = bool(enabled)


def init_schema(conn: sqlite3.Connection) -> None:
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS feature_flags (
            feature_id TEXT PRIMARY KEY,
            enabled INTEGER NOT NULL,
            updated_ts INTEGER NOT NULL
        )
        """
    )
    conn.commit()


def get_conn(db_path: str | None = None, check_same_thread: bool = True) -> sqlite3.Connection:
    path = db_path or flag_db_path()
    if path != ":memory:":
        Path(path).parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(path, check_same_thread=check_same_thread)
    conn.row_factory = sqlite3.Row
    init_schema(conn)
    return conn


class SqliteFlagStore:
    def __init__(self, db_path: str | None = None) -> None:
        self.db_path = db_path or flag_db_path()
        # an in-memory database only lives as long as its connection;
        # the connection is shared with the server's worker threads
        self._memory_conn = get_conn(":memory:", check_same_thread=False) if self.db_path == ":memory:" else None

    def _conn(self) -> sqlite3.Connection:
        if self._memory_conn is not None:
            return self._memory_conn
        return get_conn(self.db_path)

    def get_enabled(self, feature_id: str) -> bool:
        _validate_id(feature_id)
        with self._conn() as conn:
            row = conn.execute(
                "SELECT enabled FROM feature_flags WHERE feature_id = ? LIMIT 1",
                (feature_id,),
            ).fetchone()
        if row is None:
            return False
        return bool(row["enabled"])

    def set_enabled(self, feature_id: str, enabled: bool) -> None:
        _validate_id(feature_id)
        now_ts = int(time.time())
        with self._conn() as conn:
            conn.execute(
                """
                INSERT INTO feature_flags(feature_id, enabled, updated_ts)
                VALUES (?, ?, ?)
                ON CONFLICT(feature_id) DO UPDATE SET
                    enabled = excluded.enabled,
                    updated_ts = excluded.updated_ts
                """,
                (feature_id, 1 if enabled else 0, now_ts),
            )
            conn.commit()

    def all_flags(self) -> dict[str, bool]:
        with self._conn() as conn:
            rows = conn.execute(
                "SELECT feature_id, enabled FROM feature_flags ORDER BY feature_id ASC"
            ).fetchall()
        return {str(row["feature_id"]): bool(row["enabled"]) for row in rows}


def make_flag_store() -> FlagStore:
    backend = flag_store_backend()
    if backend == "env":
        return EnvFlagStore()
    if backend == "memory":
        return MemoryFlagStore()
    if backend == "sqlite":
        return SqliteFlagStore()
    raise ValueError(f"unknown SITE_FLAG_STORE backend: {backend}")
