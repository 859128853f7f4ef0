"""Database migration utilities.

Handles schema evolution by applying idempotent migrations keyed by an integer
`schema_version` stored in the metadata table. Each migration upgrades the
SQLite schema in-place while preserving user data.

Version history:
  1. trips + photos only (first release)
  2. trip budget / notes / cover columns; expenses and documents tables
  3. trips.created_at for stable "most recently created" ordering
"""

from __future__ import annotations
from pathlib import Path
import logging
import sqlite3
from typing import Optional, Set

from . import schema as schema_def
from .schema import init_db

CURRENT_SCHEMA_VERSION = 3
SCHEMA_VERSION_KEY = "schema_version"

logger = logging.getLogger("roam.db.migrate")


def _get_schema_version(conn: sqlite3.Connection) -> Optional[int]:
    try:
        cur = conn.cursor()
        cur.execute("SELECT value FROM metadata WHERE key=?", (SCHEMA_VERSION_KEY,))
        row = cur.fetchone()
        if row:
            return int(row[0])
    except sqlite3.OperationalError:
        # metadata table may not exist yet (first run before init_db)
        return None
    return None


def apply_migrations(db_path: Path) -> int:
    """Apply required migrations and return resulting schema version."""
    conn = sqlite3.connect(db_path)
    try:
        existing = _table_exists(conn, "trips")
        version = _get_schema_version(conn)
    finally:
        conn.close()

    init_db(db_path)
    if version is None:
        # Fresh databases are created at the current layout; legacy ones
        # (trips table present, no version recorded) start at 1.
        version = 1 if existing else CURRENT_SCHEMA_VERSION

    conn = sqlite3.connect(db_path)
    try:
        if version < 2:
            _migrate_to_v2(conn)
            version = 2
        if version < 3:
            _migrate_to_v3(conn)
            version = 3
        _set_schema_version(conn, version)
        conn.commit()
    finally:
        conn.close()
    logger.debug("database %s at schema version %s", db_path, version)
    return version


def _set_schema_version(conn: sqlite3.Connection, version: int) -> None:
    cur = conn.cursor()
    cur.execute(
        "INSERT INTO metadata (key, value) VALUES (?, ?) "
        "ON CONFLICT(key) DO UPDATE SET value=excluded.value, "
        f"updated_at=({schema_def.BASIC_UTC_NOW})",
        (SCHEMA_VERSION_KEY, str(version)),
    )


def _table_exists(conn: sqlite3.Connection, table: str) -> bool:
    cur = conn.cursor()
    cur.execute(
        "SELECT 1 FROM sqlite_master WHERE type='table' AND name=?", (table,)
    )
    return cur.fetchone() is not None


def _columns(cur: sqlite3.Cursor, table: str) -> Set[str]:
    cur.execute(f"PRAGMA table_info({table})")
    return {row[1] for row in cur.fetchall()}


def _migrate_to_v2(conn: sqlite3.Connection) -> None:
    """Upgrade schema to version 2 (budgets, expenses, documents)."""
    cur = conn.cursor()
    try:
        cols = _columns(cur, "trips")
        for column, ddl_type in (
            ("cover_image", "TEXT"),
            ("notes", "TEXT"),
            ("budget", "INTEGER"),
        ):
            if column not in cols:
                cur.execute(f"ALTER TABLE trips ADD COLUMN {column} {ddl_type}")
        cur.execute(schema_def.EXPENSES_DDL)
        cur.execute(schema_def.DOCUMENTS_DDL)
        conn.commit()
    except Exception:
        conn.rollback()
        raise


def _migrate_to_v3(conn: sqlite3.Connection) -> None:
    """Upgrade schema to version 3 (trip creation timestamp)."""
    cur = conn.cursor()
    try:
        if "created_at" not in _columns(cur, "trips"):
            # ALTER TABLE cannot add a column with a non-constant default
            cur.execute("ALTER TABLE trips ADD COLUMN created_at TEXT")
            cur.execute(
                f"UPDATE trips SET created_at = ({schema_def.BASIC_UTC_NOW}) "
                "WHERE created_at IS NULL"
            )
        schema_def._ensure_indexes(cur)
        conn.commit()
    except Exception:
        conn.rollback()
        raise
