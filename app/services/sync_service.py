"""
app/services/sync_service.py

Purpose: Snapshot pull and batched push against the store

- Reads all four tables into one client-shaped snapshot
- Writes client batches one record at a time, stopping at the first failure
- Scalar config writes (budget, rankProfit)
- User deletion (dependent rows go through the database cascade)
- Connectivity probe for the status endpoint
"""

from typing import Any, Dict, Iterable, List

from app.core.config import settings
from app.core.exceptions import StoreOperationError
from app.core.logging import get_logger, LogContext
from app.db.supabase import RemoteStore, get_store
from app.schemas.response import StoreStatus
from app.schemas.sync import Snapshot
from app.services.field_mapper import (
    FieldMap,
    LOAN_FIELDS,
    NOTIFICATION_FIELDS,
    USER_FIELDS,
    config_value,
    to_client_all,
    to_storage,
)
from utils.constants import (
    CONFIG_KEY_BUDGET,
    CONFIG_KEY_RANK_PROFIT,
    STATUS_PROBE_COLUMN,
    STORE_CONNECTION_FAILED_MESSAGE,
    STORE_SECRETS_MISSING_MESSAGE,
    STORE_URL_INVALID_MESSAGE,
)

logger = get_logger(__name__)

Record = Dict[str, Any]


async def fetch_snapshot(store: RemoteStore) -> Snapshot:
    """
    Reads users, loans, notifications and system config.

    The tables are read in that order; the first failing read aborts the
    whole snapshot, so no partial data is ever returned.

    Args:
        store: Store handle

    Returns:
        Snapshot in client shape

    Raises:
        StoreOperationError: If any read fails
    """
    users = await store.select(settings.USERS_TABLE)
    loans = await store.select(settings.LOANS_TABLE)
    notifications = await store.select(settings.NOTIFICATIONS_TABLE)
    config = await store.select(settings.CONFIG_TABLE)

    logger.debug(
        f"Snapshot read: {len(users)} users, {len(loans)} loans, "
        f"{len(notifications)} notifications"
    )

    return Snapshot(
        users=to_client_all(USER_FIELDS, users),
        loans=to_client_all(LOAN_FIELDS, loans),
        notifications=to_client_all(NOTIFICATION_FIELDS, notifications),
        budget=config_value(config, CONFIG_KEY_BUDGET, settings.DEFAULT_BUDGET),
        rankProfit=config_value(config, CONFIG_KEY_RANK_PROFIT, settings.DEFAULT_RANK_PROFIT),
    )


async def push_records(
    store: RemoteStore,
    table: str,
    mapping: FieldMap,
    records: Iterable[Record],
) -> int:
    """
    Upserts client records one at a time, in the order given.

    Not atomic: when a write fails, the records before it stay committed
    and the ones after it are not attempted.

    Args:
        store: Store handle
        table: Target table
        mapping: Field layout of the entity
        records: Client-shaped records

    Returns:
        Number of records written

    Raises:
        StoreOperationError: On the first failing upsert
    """
    written = 0
    with LogContext(table=table, entity=mapping.entity):
        for record in records:
            row = to_storage(mapping, record)
            try:
                await store.upsert(table, row)
            except StoreOperationError:
                logger.warning(
                    f"Batch push to {table} stopped after {written} record(s)",
                    extra={"record_id": row.get("id"), "count": written}
                )
                raise
            written += 1

        logger.info(f"Pushed {written} {mapping.entity} record(s)", extra={"count": written})

    return written


async def push_users(store: RemoteStore, records: List[Record]) -> int:
    return await push_records(store, settings.USERS_TABLE, USER_FIELDS, records)


async def push_loans(store: RemoteStore, records: List[Record]) -> int:
    return await push_records(store, settings.LOANS_TABLE, LOAN_FIELDS, records)


async def push_notifications(store: RemoteStore, records: List[Record]) -> int:
    return await push_records(store, settings.NOTIFICATIONS_TABLE, NOTIFICATION_FIELDS, records)


async def set_config_value(store: RemoteStore, key: str, value: Any) -> None:
    """
    Upserts one system_config row keyed by name.
    """
    await store.upsert(settings.CONFIG_TABLE, {"key": key, "value": value})
    logger.info(f"System config '{key}' set to {value}")


async def delete_user(store: RemoteStore, user_id: str) -> None:
    """
    Deletes a user row.

    Loans and notifications of the user are removed by the database's
    ON DELETE CASCADE, not here. A missing id is not an error.
    """
    await store.delete(settings.USERS_TABLE, user_id)
    logger.info(f"User {user_id} deleted", extra={"record_id": user_id})


async def check_store_status() -> StoreStatus:
    """
    Probes the store with a one-row read of the config table.

    Distinguishes missing secrets, an unusable URL and a failing
    query. Never raises.
    """
    if not settings.store_configured:
        return StoreStatus(connected=False, error=STORE_SECRETS_MISSING_MESSAGE)

    store = await get_store()
    if store is None:
        return StoreStatus(connected=False, error=STORE_URL_INVALID_MESSAGE)

    try:
        await store.select(settings.CONFIG_TABLE, STATUS_PROBE_COLUMN, limit=1)
    except StoreOperationError as e:
        logger.error(f"Supabase connection error: {e.message}")
        return StoreStatus(connected=False, error=e.message or STORE_CONNECTION_FAILED_MESSAGE)

    return StoreStatus(connected=True, error=None)
