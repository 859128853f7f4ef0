"""Database schema DDL definitions and initialization utilities.

Tables:
  - trips: trip records with lifecycle status, optional date range and budget
  - expenses: spend entries owned by a trip (minor currency units)
  - documents: transport / stay / activity references owned by a trip
  - photos: image URIs owned by a trip
  - metadata: key/value store (schema version)

Child tables cascade on trip deletion; connections must enable
``PRAGMA foreign_keys`` for SQLite to enforce it.
"""

from __future__ import annotations
import sqlite3
from typing import Sequence
from pathlib import Path

BASIC_UTC_NOW = "strftime('%Y-%m-%dT%H:%M:%fZ','now')"

TRIPS_DDL = f"""
CREATE TABLE IF NOT EXISTS trips (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    destination TEXT NOT NULL,
    status TEXT NOT NULL DEFAULT 'ideated'
        CHECK (status IN ('ideated','planned','confirmed')),
    start_date TEXT, -- ISO date (YYYY-MM-DD)
    end_date TEXT,
    cover_image TEXT,
    notes TEXT,
    budget INTEGER, -- minor currency units
    created_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

EXPENSES_DDL = """
CREATE TABLE IF NOT EXISTS expenses (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    trip_id INTEGER NOT NULL,
    title TEXT NOT NULL,
    amount INTEGER NOT NULL, -- minor currency units
    category TEXT NOT NULL,
    created_at INTEGER, -- epoch milliseconds
    FOREIGN KEY (trip_id) REFERENCES trips(id) ON DELETE CASCADE
);
"""

DOCUMENTS_DDL = """
CREATE TABLE IF NOT EXISTS documents (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    trip_id INTEGER NOT NULL,
    type TEXT NOT NULL, -- 'transport' | 'stay' | 'activity'
    title TEXT NOT NULL,
    subtitle TEXT,
    link TEXT,
    FOREIGN KEY (trip_id) REFERENCES trips(id) ON DELETE CASCADE
);
"""

PHOTOS_DDL = """
CREATE TABLE IF NOT EXISTS photos (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    trip_id INTEGER NOT NULL,
    uri TEXT NOT NULL,
    caption TEXT,
    created_at INTEGER, -- epoch milliseconds
    FOREIGN KEY (trip_id) REFERENCES trips(id) ON DELETE CASCADE
);
"""

METADATA_DDL = f"""
CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

TRIPS_START_INDEX_DDL = (
    "CREATE INDEX IF NOT EXISTS idx_trips_start_date ON trips(start_date);"
)
EXPENSES_TRIP_INDEX_DDL = (
    "CREATE INDEX IF NOT EXISTS idx_expenses_trip ON expenses(trip_id);"
)
DOCUMENTS_TRIP_INDEX_DDL = (
    "CREATE INDEX IF NOT EXISTS idx_documents_trip ON documents(trip_id);"
)
PHOTOS_TRIP_INDEX_DDL = "CREATE INDEX IF NOT EXISTS idx_photos_trip ON photos(trip_id);"

DDL_ORDER: Sequence[str] = (
    TRIPS_DDL,
    EXPENSES_DDL,
    DOCUMENTS_DDL,
    PHOTOS_DDL,
    METADATA_DDL,
)

INDEX_DDL: Sequence[str] = (
    TRIPS_START_INDEX_DDL,
    EXPENSES_TRIP_INDEX_DDL,
    DOCUMENTS_TRIP_INDEX_DDL,
    PHOTOS_TRIP_INDEX_DDL,
)


def init_db(path: Path) -> None:
    """Create all tables idempotently.

    Parameters
    ----------
    path: Path to SQLite database file.
    """
    conn = sqlite3.connect(path)
    try:
        cur = conn.cursor()
        for ddl in DDL_ORDER:
            cur.execute(ddl)
        _ensure_indexes(cur)
        conn.commit()
    finally:
        conn.close()


def _ensure_indexes(cur: sqlite3.Cursor) -> None:
    """Create indexes, tolerating legacy schemas missing indexed columns."""
    for ddl in INDEX_DDL:
        try:
            cur.execute(ddl)
        except sqlite3.OperationalError:
            # Legacy tables may lack columns; migration adds them.
            continue
