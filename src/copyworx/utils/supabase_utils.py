"""Supabase connection management utilities."""

import asyncio
from typing import Any, Dict, List, Optional, Tuple
from supabase import create_client, Client
from supabase.lib.client_options import ClientOptions
from postgrest.exceptions import APIError

from ..config.settings import Settings
from ..exceptions import DatabaseNotConfigured
from .logging import get_logger
from .retry import retry_with_backoff

logger = get_logger(__name__)

FILTERABLE_OPERATIONS = ("select", "update", "delete")


class SupabaseManager:
    """Manager for the service-role Supabase client.

    Every row-level operation goes through ``execute_with_retry`` so that
    transient PostgREST failures are retried with exponential backoff.
    """

    def __init__(self, settings: Settings, client: Optional[Client] = None):
        """Create the Supabase client, unless one is injected.

        Raises:
            DatabaseNotConfigured: If URL or service key are missing
        """
        self.settings = settings
        self._client = client
        if self._client is None:
            if not settings.supabase_configured:
                raise DatabaseNotConfigured()

            options = ClientOptions(
                schema="public",
                headers={
                    "X-Client-Info": "copyworx",
                },
                postgrest_client_timeout=settings.supabase_timeout
            )

            self._client = create_client(
                settings.supabase_url,
                settings.supabase_service_key,
                options=options
            )
            logger.info("Initialized Supabase client")

    @property
    def client(self) -> Client:
        """Get the Supabase client instance."""
        if self._client is None:
            raise RuntimeError("Supabase client not initialized")
        return self._client

    def _apply_filters_to_query(self, query, filters: Dict[str, Any]):
        """Apply equality filters to a query."""
        for key, value in filters.items():
            query = query.eq(key, value)
        return query

    def _execute_operation(
        self,
        operation: str,
        table: str,
        data: Optional[dict],
        filters: Dict[str, Any],
        order: Optional[Tuple[str, bool]],
        limit: Optional[int],
    ):
        """Build and execute a single database operation."""
        builder = self.client.table(table)
        if operation == "select":
            query = builder.select((data or {}).get("select", "*"))
        elif operation == "insert":
            query = builder.insert(data)
        elif operation == "update":
            query = builder.update(data)
        elif operation == "upsert":
            query = builder.upsert(data)
        elif operation == "delete":
            query = builder.delete()
        else:
            raise ValueError(f"Unsupported operation: {operation}")

        if operation in FILTERABLE_OPERATIONS:
            query = self._apply_filters_to_query(query, filters)
        elif filters:
            raise ValueError(f"Filters are not supported for {operation}")

        if order is not None:
            column, descending = order
            query = query.order(column, desc=descending)
        if limit is not None:
            query = query.limit(limit)

        return query.execute()

    async def execute_with_retry(
        self,
        operation: str,
        table: str,
        data: Optional[dict] = None,
        *,
        filters: Optional[Dict[str, Any]] = None,
        order: Optional[Tuple[str, bool]] = None,
        limit: Optional[int] = None,
        max_retries: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Execute a Supabase operation with retry logic.

        Args:
            operation (str): Operation type ('insert', 'update', 'upsert', 'delete', 'select')
            table (str): Target table name
            data (Optional[dict]): Row data for writes
            filters (Optional[Dict[str, Any]]): Equality filters, e.g. ``{"user_id": ...}``
            order (Optional[Tuple[str, bool]]): Column and descending flag
            limit (Optional[int]): Maximum rows to return
            max_retries (Optional[int]): Retries after the first attempt. Defaults to settings value.

        Returns:
            List[Dict[str, Any]]: Rows returned by PostgREST

        Raises:
            APIError: If the operation fails after all retries
            ValueError: If operation type is invalid
        """
        if max_retries is None:
            max_retries = self.settings.max_retries
        filters = filters or {}

        logger.debug(
            "Executing Supabase operation",
            table=table,
            operation=operation,
            filter_keys=list(filters.keys()),
        )

        async def attempt():
            # supabase-py is synchronous; keep the blocking call off the event loop
            return await asyncio.to_thread(
                self._execute_operation, operation, table, data, filters, order, limit
            )

        response = await retry_with_backoff(
            attempt,
            max_retries=max_retries,
            base_delay=self.settings.retry_delay,
            backoff=self.settings.retry_backoff,
            max_delay=self.settings.retry_max_delay,
            retry_on=lambda e: isinstance(e, APIError),
            operation=f"supabase.{operation}.{table}",
        )

        logger.debug("Supabase operation succeeded", table=table, operation=operation)
        return response.data or []
