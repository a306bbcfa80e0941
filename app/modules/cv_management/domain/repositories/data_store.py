# 📄 File: app/modules/cv_management/domain/repositories/data_store.py
# 🧭 Purpose (Layman Explanation):
# Defines the contract for how to save, find, count, change and remove records without saying
# which database sits underneath, so the CV rules work the same against Supabase or a test store.
# 🧪 Purpose (Technical Summary):
# Table-oriented repository interface: CRUD by table name with equality filters, time-windowed
# counts for usage statistics and an atomic counter increment.
# 🔗 Dependencies:
# abc, datetime, typing
# 🔄 Connected Modules / Calls From:
# cv_service.py, infrastructure.database implementations, presentation dependencies

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

Row = Dict[str, Any]
Filters = Dict[str, Any]


class DataStore(ABC):
    """
    Repository interface for table-shaped persistence.

    Implementation Notes:
    - Rows are plain dictionaries keyed by column name
    - Filters are column equality conditions combined with AND
    - Every row has a string ``id``; ``insert`` fills ``id`` and ``created_at`` when absent
    - Failures surface as ``DatabaseError``
    """

    @abstractmethod
    def get(self, table: str, record_id: str) -> Optional[Row]:
        """
        Get a row by id.

        Returns:
            The row if found, None otherwise
        """
        pass

    @abstractmethod
    def select(self, table: str, filters: Optional[Filters] = None) -> List[Row]:
        """Return all rows matching every filter."""
        pass

    @abstractmethod
    def count(
        self,
        table: str,
        filters: Optional[Filters] = None,
        since: Optional[datetime] = None,
        since_column: str = "created_at",
    ) -> int:
        """
        Count matching rows.

        Args:
            table: Table name
            filters: Column equality conditions
            since: Only rows whose ``since_column`` is at or after this instant
            since_column: Timestamp column used with ``since``

        Returns:
            Number of matching rows
        """
        pass

    @abstractmethod
    def insert(self, table: str, row: Row) -> Row:
        """Insert a row and return it as stored."""
        pass

    @abstractmethod
    def update(self, table: str, record_id: str, changes: Row) -> Optional[Row]:
        """
        Apply changes to a row.

        Returns:
            The updated row, None if no row has that id
        """
        pass

    @abstractmethod
    def delete(self, table: str, filters: Filters) -> int:
        """Delete matching rows and return how many were removed."""
        pass

    @abstractmethod
    def increment_counter(self, table: str, record_id: str, column: str, amount: int = 1) -> int:
        """
        Atomically add ``amount`` to an integer column.

        Concurrent increments on the same row must never lose an update.

        Returns:
            The new counter value

        Raises:
            NotFoundError: If no row has that id
            DatabaseError: If the update cannot be applied
        """
        pass
