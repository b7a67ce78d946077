"""SITEFEATURES FILE PURPOSE
Purpose: environment configuration helpers (safe defaults).
Hot path: yes (read-only env lookups; lightweight).
Feature flags: SITE_DEBUG, SITE_FEATURE_*, SITE_FEATURES_SETUP_ON_START.
Failure mode: safe defaults when unset.
"""

from __future__ import annotations

import os

DEFAULT_FLAG_DB_PATH = "ops/site_flags.sqlite3"


def env_flag(name: str, default: str = "0") -> bool:
    v = (os.getenv(name) or default).strip().lower()
    return v in ("1", "true", "yes", "on")


def env_str(name: str, default: str = "") -> str:
    return (os.getenv(name) or default).strip()


def is_debug() -> bool:
    return env_flag("SITE_DEBUG", "0")


def flag_store_backend() -> str:
    return env_str("SITE_FLAG_STORE", "env").lower()


def flag_db_path() -> str:
    return env_str("SITE_FLAG_DB_PATH", DEFAULT_FLAG_DB_PATH)


def admin_api_key() -> str | None:
    key = env_str("SITE_ADMIN_API_KEY")
    return key or None


def setup_on_start() -> bool:
    return env_flag("SITE_FEATURES_SETUP_ON_START", "0")
