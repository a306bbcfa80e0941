# 📄 File: app/modules/cv_management/infrastructure/database/supabase_data_store.py
# 🧭 Purpose (Layman Explanation):
# Saves and reads CVs, users and download/share records in the Supabase database, and makes sure
# two downloads at the same moment both get counted.
# 🧪 Purpose (Technical Summary):
# DataStore implementation over the supabase-py PostgREST query builder. Counter increments use
# compare-and-set updates (``eq(column, old)``) retried a bounded number of times; PostgREST
# APIError is translated to DatabaseError.
# 🔗 Dependencies:
# supabase (Client), postgrest (APIError), app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# presentation dependencies (backend selection), cv_service.py through the DataStore contract

import logging
from datetime import datetime
from typing import Any, Callable, List, Optional, TypeVar

from postgrest import APIError
from supabase import Client

from app.shared.core.exceptions import DatabaseError, NotFoundError

from ...domain.repositories.data_store import DataStore, Filters, Row

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_COUNTER_RETRIES = 5


def _apply_filters(query: Any, filters: Optional[Filters]) -> Any:
    for column, value in (filters or {}).items():
        query = query.is_(column, "null") if value is None else query.eq(column, value)
    return query


class SupabaseDataStore(DataStore):
    """Supabase-backed tables."""

    def __init__(self, client: Client, max_retries: int = DEFAULT_COUNTER_RETRIES):
        self.client = client
        self.max_retries = max_retries

    def _execute(self, operation: str, table: str, run: Callable[[], T]) -> T:
        try:
            return run()
        except APIError as e:
            logger.error(f"Supabase {operation} on {table} failed: {e}")
            raise DatabaseError(
                f"Failed to {operation} {table}",
                operation=operation,
                table=table,
                details={"reason": getattr(e, "message", None) or str(e)},
            )

    def get(self, table: str, record_id: str) -> Optional[Row]:
        response = self._execute(
            "get", table,
            lambda: self.client.table(table).select("*").eq("id", str(record_id)).limit(1).execute()
        )
        return response.data[0] if response.data else None

    def select(self, table: str, filters: Optional[Filters] = None) -> List[Row]:
        response = self._execute(
            "select", table,
            lambda: _apply_filters(self.client.table(table).select("*"), filters).execute()
        )
        return list(response.data or [])

    def count(
        self,
        table: str,
        filters: Optional[Filters] = None,
        since: Optional[datetime] = None,
        since_column: str = "created_at",
    ) -> int:
        def run():
            query = _apply_filters(self.client.table(table).select("id", count="exact"), filters)
            if since is not None:
                query = query.gte(since_column, since.isoformat())
            return query.execute()

        response = self._execute("count", table, run)
        if response.count is not None:
            return response.count
        return len(response.data or [])

    def insert(self, table: str, row: Row) -> Row:
        response = self._execute(
            "insert", table,
            lambda: self.client.table(table).insert(row).execute()
        )
        if not response.data:
            raise DatabaseError(f"Insert into {table} returned no row", operation="insert", table=table)
        return response.data[0]

    def update(self, table: str, record_id: str, changes: Row) -> Optional[Row]:
        response = self._execute(
            "update", table,
            lambda: self.client.table(table).update(changes).eq("id", str(record_id)).execute()
        )
        return response.data[0] if response.data else None

    def delete(self, table: str, filters: Filters) -> int:
        response = self._execute(
            "delete", table,
            lambda: _apply_filters(self.client.table(table).delete(), filters).execute()
        )
        return len(response.data or [])

    def increment_counter(self, table: str, record_id: str, column: str, amount: int = 1) -> int:
        """
        Compare-and-set increment.

        Reads the current value, then updates only if the column still holds
        that value. An empty update result means another writer got there
        first, so the read is repeated.
        """
        for attempt in range(1, self.max_retries + 1):
            row = self.get(table, record_id)
            if row is None:
                raise NotFoundError(resource_type=table, resource_id=str(record_id))

            current = row.get(column)
            new_value = (current or 0) + amount

            def run():
                query = self.client.table(table).update({column: new_value}).eq("id", str(record_id))
                query = query.is_(column, "null") if current is None else query.eq(column, current)
                return query.execute()

            response = self._execute("increment", table, run)
            if response.data:
                return new_value

            logger.debug(f"Counter {table}.{column} changed concurrently (attempt {attempt}), retrying")

        logger.error(f"Counter {table}.{column} for {record_id} not updated after {self.max_retries} attempts")
        raise DatabaseError(
            f"Could not update {column} after {self.max_retries} attempts",
            operation="increment",
            table=table,
        )
