"""
app/db/supabase.py

Purpose: Supabase connection setup

- Builds the async Supabase client from the two configured secrets
- Keeps one process-wide handle, retried lazily while absent
- Wraps select / upsert / delete so every failure is a StoreOperationError
- FastAPI dependency that hands the handle to route handlers
"""

import asyncio
from typing import Any, Dict, List, Optional, Union

import httpx
from postgrest.exceptions import APIError
from supabase import AsyncClient, acreate_client

from app.core.config import settings
from app.core.exceptions import (
    InvalidStoreConfigError,
    StoreNotConfiguredError,
    StoreOperationError,
)
from app.core.logging import get_logger
from utils.constants import (
    STORE_NOT_INITIALIZED_MESSAGE,
    STORE_URL_INVALID_MESSAGE,
)
from utils.validation_utils import is_valid_url

logger = get_logger(__name__)

Record = Dict[str, Any]


class RemoteStore:
    """
    Thin async facade over a Supabase client.

    Each call is a single request; nothing is retried and nothing is
    cached between calls.
    """

    def __init__(self, client: AsyncClient):
        self._client = client

    @property
    def client(self) -> AsyncClient:
        return self._client

    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: Optional[Dict[str, Any]] = None,
        limit: Optional[int] = None,
    ) -> List[Record]:
        """
        Selects rows from a table.

        Args:
            table: Table name
            columns: Comma-separated column list
            filters: Equality filters (column -> value)
            limit: Maximum number of rows

        Returns:
            List of rows (possibly empty)

        Raises:
            StoreOperationError: If the request fails
        """
        query = self._client.table(table).select(columns)
        for column, value in (filters or {}).items():
            query = query.eq(column, value)
        if limit is not None:
            query = query.limit(limit)

        response = await self._execute(query, table, "select")
        return response.data or []

    async def upsert(self, table: str, record: Union[Record, List[Record]]) -> None:
        """
        Inserts or updates one record (or a batch) by primary key.

        Raises:
            StoreOperationError: If the request fails
        """
        await self._execute(self._client.table(table).upsert(record), table, "upsert")

    async def delete(self, table: str, record_id: Any) -> None:
        """
        Deletes the row with the given id. Deleting a missing id succeeds.

        Raises:
            StoreOperationError: If the request fails
        """
        await self._execute(
            self._client.table(table).delete().eq("id", record_id),
            table,
            "delete",
        )

    async def _execute(self, query, table: str, operation: str):
        try:
            return await query.execute()
        except APIError as e:
            message = e.message or str(e)
            logger.error(f"Supabase {operation} on {table} failed: {message}")
            raise StoreOperationError(message, details={"table": table, "code": e.code}) from e
        except httpx.HTTPError as e:
            logger.error(f"Supabase {operation} on {table} unreachable: {e}")
            raise StoreOperationError(str(e) or type(e).__name__, details={"table": table}) from e


# Global store handle
_store: Optional[RemoteStore] = None
_store_lock = asyncio.Lock()


async def create_store(url: Optional[str], key: Optional[str]) -> Optional[RemoteStore]:
    """
    Builds a store handle from the Supabase URL and service role key.

    Never raises: missing secrets, a malformed URL or a client the
    library refuses to build all return None.

    Args:
        url: Supabase project URL
        key: Service role key

    Returns:
        RemoteStore or None
    """
    if not url or not key:
        return None

    if not is_valid_url(url):
        logger.error(f"Invalid Supabase URL: {url}")
        return None

    try:
        client = await acreate_client(url, key)
    except Exception as e:
        logger.error(f"Could not create Supabase client for {url}: {e}")
        return None

    return RemoteStore(client)


async def get_store() -> Optional[RemoteStore]:
    """
    Returns the process-wide store handle, building it if absent.

    A failed build is not remembered: the next call tries again.
    """
    global _store

    if _store is not None:
        return _store

    async with _store_lock:
        if _store is None:
            _store = await create_store(
                settings.SUPABASE_URL,
                settings.SUPABASE_SERVICE_ROLE_KEY,
            )
            if _store is not None:
                logger.info("✅ Supabase client initialized")

    return _store


async def require_store() -> RemoteStore:
    """
    FastAPI dependency for handlers that need the store.

    Raises:
        StoreNotConfiguredError: If the secrets are missing
        InvalidStoreConfigError: If the secrets are set but unusable
    """
    store = await get_store()
    if store is not None:
        return store

    if not settings.store_configured:
        raise StoreNotConfiguredError(STORE_NOT_INITIALIZED_MESSAGE)
    raise InvalidStoreConfigError(STORE_URL_INVALID_MESSAGE)


async def close_store():
    """
    Drops the store handle.
    Called during application shutdown.
    """
    global _store

    if _store is not None:
        logger.info("Releasing Supabase client")
        _store = None
