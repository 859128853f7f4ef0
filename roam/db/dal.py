"""Data Access Layer for trips and their owned records.

Responsibilities
----------------
- Provide CRUD helpers for trips, expenses, documents and photos.
- Scope child listings to a trip id; reject inserts for unknown trips with
  `NotFound` instead of surfacing foreign key errors.
- Leave all derived state (status transitions, budget aggregates, calendar
  marks) to the service layer: this module only reads and writes rows.
"""

from __future__ import annotations

from contextlib import contextmanager
from datetime import date
from pathlib import Path
import sqlite3
from typing import Any, Dict, Iterator, List, Optional

from roam.core.errors import NotFound

UTC_NOW_SQL = "strftime('%Y-%m-%dT%H:%M:%fZ','now')"
VALID_TRIP_STATUSES = {"ideated", "planned", "confirmed"}
TRIP_ORDER_COLUMNS = {"id", "start_date", "created_at", "title", "status"}
_UNSET = object()


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if isinstance(value, date) else None


class Database:
    def __init__(self, db_path: Path):
        self.db_path = db_path

    # ------------------------------------------------------------------
    # Connection helpers
    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _require_trip(self, cur: sqlite3.Cursor, trip_id: int) -> None:
        cur.execute("SELECT 1 FROM trips WHERE id = ?", (trip_id,))
        if cur.fetchone() is None:
            raise NotFound(f"trip {trip_id} not found")

    # ------------------------------------------------------------------
    # Trip CRUD
    def list_trips(
        self, order_by: str = "id", descending: bool = False
    ) -> List[Dict[str, Any]]:
        if order_by not in TRIP_ORDER_COLUMNS:
            raise ValueError(f"Unsupported trip ordering '{order_by}'")
        direction = "DESC" if descending else "ASC"
        # id breaks ties so equal keys keep a stable order
        query = f"SELECT * FROM trips ORDER BY {order_by} {direction}, id {direction}"
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(query)
            return [dict(r) for r in cur.fetchall()]

    def get_trip(self, trip_id: int) -> Optional[Dict[str, Any]]:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("SELECT * FROM trips WHERE id = ?", (trip_id,))
            row = cur.fetchone()
            return dict(row) if row else None

    def create_trip(
        self,
        title: str,
        destination: str,
        status: str = "ideated",
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        notes: Optional[str] = None,
        cover_image: Optional[str] = None,
        budget: Optional[int] = None,
    ) -> int:
        if status not in VALID_TRIP_STATUSES:
            raise ValueError(f"Unsupported trip status '{status}'")
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                f"""
                INSERT INTO trips (
                    title, destination, status, start_date, end_date,
                    notes, cover_image, budget, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ({UTC_NOW_SQL}))
                """,
                (
                    title,
                    destination,
                    status,
                    _iso(start_date),
                    _iso(end_date),
                    notes,
                    cover_image,
                    budget,
                ),
            )
            return int(cur.lastrowid)

    def update_trip(
        self,
        trip_id: int,
        *,
        title: Any = _UNSET,
        destination: Any = _UNSET,
        start_date: Any = _UNSET,
        end_date: Any = _UNSET,
        notes: Any = _UNSET,
        cover_image: Any = _UNSET,
    ) -> None:
        updates: List[str] = []
        params: List[Any] = []

        for column, value in (
            ("title", title),
            ("destination", destination),
            ("notes", notes),
            ("cover_image", cover_image),
        ):
            if value is not _UNSET:
                updates.append(f"{column} = ?")
                params.append(value)
        if start_date is not _UNSET:
            updates.append("start_date = ?")
            params.append(_iso(start_date))
        if end_date is not _UNSET:
            updates.append("end_date = ?")
            params.append(_iso(end_date))

        if not updates:
            return
        self._update_trip_columns(trip_id, updates, params)

    def update_trip_status(self, trip_id: int, status: str) -> None:
        if status not in VALID_TRIP_STATUSES:
            raise ValueError(f"Unsupported trip status '{status}'")
        self._update_trip_columns(trip_id, ["status = ?"], [status])

    def update_trip_budget(self, trip_id: int, minor_units: Optional[int]) -> None:
        self._update_trip_columns(trip_id, ["budget = ?"], [minor_units])

    def _update_trip_columns(
        self, trip_id: int, updates: List[str], params: List[Any]
    ) -> None:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                f"UPDATE trips SET {', '.join(updates)} WHERE id = ?",
                (*params, trip_id),
            )
            if cur.rowcount == 0:
                raise NotFound(f"trip {trip_id} not found")

    def delete_trip(self, trip_id: int) -> None:
        """Delete a trip; expenses, documents and photos cascade."""
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("DELETE FROM trips WHERE id = ?", (trip_id,))
            if cur.rowcount == 0:
                raise NotFound(f"trip {trip_id} not found")

    # ------------------------------------------------------------------
    # Expenses
    def list_expenses(self, trip_id: int) -> List[Dict[str, Any]]:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                "SELECT * FROM expenses WHERE trip_id = ? ORDER BY created_at DESC, id DESC",
                (trip_id,),
            )
            return [dict(r) for r in cur.fetchall()]

    def insert_expense(
        self,
        trip_id: int,
        title: str,
        amount: int,
        category: str,
        created_at: int,
    ) -> int:
        with self._connect() as conn:
            cur = conn.cursor()
            self._require_trip(cur, trip_id)
            cur.execute(
                """
                INSERT INTO expenses (trip_id, title, amount, category, created_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (trip_id, title, amount, category, created_at),
            )
            return int(cur.lastrowid)

    def delete_expense(self, expense_id: int) -> None:
        self._delete_by_id("expenses", expense_id, "expense")

    # ------------------------------------------------------------------
    # Documents
    def list_documents(self, trip_id: int) -> List[Dict[str, Any]]:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                "SELECT * FROM documents WHERE trip_id = ? ORDER BY id ASC",
                (trip_id,),
            )
            return [dict(r) for r in cur.fetchall()]

    def insert_document(
        self,
        trip_id: int,
        type: str,
        title: str,
        subtitle: Optional[str] = None,
        link: Optional[str] = None,
    ) -> int:
        with self._connect() as conn:
            cur = conn.cursor()
            self._require_trip(cur, trip_id)
            cur.execute(
                """
                INSERT INTO documents (trip_id, type, title, subtitle, link)
                VALUES (?, ?, ?, ?, ?)
                """,
                (trip_id, type, title, subtitle, link),
            )
            return int(cur.lastrowid)

    def delete_document(self, document_id: int) -> None:
        self._delete_by_id("documents", document_id, "document")

    # ------------------------------------------------------------------
    # Photos
    def list_photos(self, trip_id: int) -> List[Dict[str, Any]]:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                "SELECT * FROM photos WHERE trip_id = ? ORDER BY id DESC",
                (trip_id,),
            )
            return [dict(r) for r in cur.fetchall()]

    def insert_photo(
        self,
        trip_id: int,
        uri: str,
        caption: Optional[str],
        created_at: int,
    ) -> int:
        with self._connect() as conn:
            cur = conn.cursor()
            self._require_trip(cur, trip_id)
            cur.execute(
                "INSERT INTO photos (trip_id, uri, caption, created_at) VALUES (?, ?, ?, ?)",
                (trip_id, uri, caption, created_at),
            )
            return int(cur.lastrowid)

    def delete_photo(self, photo_id: int) -> None:
        self._delete_by_id("photos", photo_id, "photo")

    # ------------------------------------------------------------------
    def _delete_by_id(self, table: str, record_id: int, label: str) -> None:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(f"DELETE FROM {table} WHERE id = ?", (record_id,))
            if cur.rowcount == 0:
                raise NotFound(f"{label} {record_id} not found")


__all__ = ["Database", "TRIP_ORDER_COLUMNS"]
