"""
In-memory data store.

Implements DataStore for tests and local development without Supabase.
A single lock serialises every operation, which makes counter increments atomic.
"""

import copy
import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from app.shared.core.exceptions import DatabaseError, NotFoundError

from ...domain.repositories.data_store import DataStore, Filters, Row

logger = logging.getLogger(__name__)


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None
    # Naive timestamps are taken as local time
    return parsed if parsed.tzinfo else parsed.astimezone()


def _matches(row: Row, filters: Optional[Filters]) -> bool:
    return all(row.get(column) == value for column, value in (filters or {}).items())


class MemoryDataStore(DataStore):
    """Dictionary-backed tables with the same semantics as the Supabase store."""

    def __init__(self, tables: Optional[Dict[str, List[Row]]] = None):
        self._tables: Dict[str, Dict[str, Row]] = {}
        self._lock = threading.Lock()
        for table, rows in (tables or {}).items():
            for row in rows:
                self.insert(table, row)

    def _table(self, table: str) -> Dict[str, Row]:
        return self._tables.setdefault(table, {})

    def get(self, table: str, record_id: str) -> Optional[Row]:
        with self._lock:
            row = self._table(table).get(str(record_id))
            return copy.deepcopy(row) if row is not None else None

    def select(self, table: str, filters: Optional[Filters] = None) -> List[Row]:
        with self._lock:
            return [
                copy.deepcopy(row)
                for row in self._table(table).values()
                if _matches(row, filters)
            ]

    def count(
        self,
        table: str,
        filters: Optional[Filters] = None,
        since: Optional[datetime] = None,
        since_column: str = "created_at",
    ) -> int:
        with self._lock:
            total = 0
            for row in self._table(table).values():
                if not _matches(row, filters):
                    continue
                if since is not None:
                    stamp = _parse_timestamp(row.get(since_column))
                    if stamp is None or stamp < since:
                        continue
                total += 1
            return total

    def insert(self, table: str, row: Row) -> Row:
        stored = copy.deepcopy(row)
        stored["id"] = str(stored.get("id") or uuid.uuid4())
        stored.setdefault("created_at", datetime.now(timezone.utc).isoformat())

        with self._lock:
            rows = self._table(table)
            if stored["id"] in rows:
                raise DatabaseError(
                    f"Duplicate id {stored['id']} in {table}",
                    operation="insert",
                    table=table,
                )
            rows[stored["id"]] = stored
            return copy.deepcopy(stored)

    def update(self, table: str, record_id: str, changes: Row) -> Optional[Row]:
        with self._lock:
            row = self._table(table).get(str(record_id))
            if row is None:
                return None
            row.update({k: copy.deepcopy(v) for k, v in changes.items() if k != "id"})
            return copy.deepcopy(row)

    def delete(self, table: str, filters: Filters) -> int:
        with self._lock:
            rows = self._table(table)
            doomed = [row_id for row_id, row in rows.items() if _matches(row, filters)]
            for row_id in doomed:
                del rows[row_id]
            return len(doomed)

    def increment_counter(self, table: str, record_id: str, column: str, amount: int = 1) -> int:
        with self._lock:
            row = self._table(table).get(str(record_id))
            if row is None:
                raise NotFoundError(resource_type=table, resource_id=str(record_id))
            row[column] = (row.get(column) or 0) + amount
            return row[column]
