"""
Base CRUD Class
Base class for table operations against the Supabase store.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

import httpx
from postgrest import APIError

from dreamrate.utils.exceptions import NotFoundError, StoreError, store_error_from
from dreamrate.utils.logger import get_logger

logger = get_logger(__name__)

Row = Dict[str, Any]


class BaseCRUD(ABC):
    """
    Base CRUD class for PostgREST tables.

    Every method issues exactly one round trip and raises a StoreError
    subclass on failure. Nothing is retried.
    """

    def __init__(self, db: Any):
        """
        Initialize CRUD with a store handle.

        Args:
            db: Supabase AsyncClient or AsyncPostgrestClient (anything with
                `.table(name)` returning a request builder)
        """
        self.db = db

    @property
    @abstractmethod
    def table_name(self) -> str:
        """Get table name. Must be implemented by subclass."""
        pass

    def table(self) -> Any:
        """Start a request against this CRUD's table."""
        return self.db.table(self.table_name)

    async def _execute(self, request: Any, action: str) -> Any:
        """
        Execute a request builder and return its data.

        Args:
            request: PostgREST request builder
            action: Short label for logs

        Returns:
            Response data (list of rows, or a row for single-row requests)
        """
        try:
            response = await request.execute()
        except (APIError, httpx.HTTPError) as e:
            error = store_error_from(e)
            logger.warning(
                f"{self.table_name} {action} failed: {error.error_code} - {error.message}",
                extra={"extra_data": {"table": self.table_name, "action": action, "details": error.details}},
            )
            raise error from e
        return response.data

    async def get_by_id(self, row_id: int, columns: str = "*") -> Row:
        """
        Get one row by ID.

        Raises:
            NotFoundError: If no row has that ID
        """
        request = self.table().select(columns).eq("id", row_id).single()
        return await self._execute(request, "get")

    async def list_by(self, field: str, value: Any, columns: str = "*") -> List[Row]:
        """
        List rows where `field` equals `value`, newest first.
        """
        request = (
            self.table()
            .select(columns)
            .eq(field, value)
            .order("created_at", desc=True)
        )
        return await self._execute(request, f"list by {field}")

    async def insert(self, row: Row) -> Row:
        """
        Insert a row and return it as stored.
        """
        data = await self._execute(self.table().insert(row), "insert")
        if not data:
            raise StoreError(
                message=f"Insert into {self.table_name} returned no row",
                details={"table": self.table_name},
            )
        logger.info(f"Created {self.table_name} row {data[0].get('id')}")
        return data[0]

    async def update(self, row_id: int, row: Row) -> Row:
        """
        Update a row by ID and return it as stored.

        Raises:
            NotFoundError: If no row matched (missing, or hidden by access policy)
        """
        data = await self._execute(self.table().update(row).eq("id", row_id), "update")
        if not data:
            raise NotFoundError(
                message=f"No {self.table_name} row with id {row_id}",
                details={"table": self.table_name, "id": row_id},
            )
        logger.info(f"Updated {self.table_name} row {row_id}")
        return data[0]

    async def delete(self, row_id: int) -> None:
        """
        Delete a row by ID. Deleting a missing ID is not an error.
        """
        await self._execute(self.table().delete().eq("id", row_id), "delete")
        logger.info(f"Deleted {self.table_name} row {row_id}")
