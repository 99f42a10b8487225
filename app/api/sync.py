"""
app/api/sync.py

Purpose: Data sync endpoints used by the web client

- GET /api/data returns the full snapshot
- POST /api/users|loans|notifications push client batches
- POST /api/budget and /api/rankProfit set scalar config
- DELETE /api/users/{user_id} removes a user
- Every store failure surfaces as a 500 with the store's message
"""

from fastapi import APIRouter, Body, Depends
from typing import Any, Dict, List

from app.core.logging import get_logger
from app.db.supabase import RemoteStore, require_store
from app.schemas.response import SuccessResponse
from app.schemas.sync import BudgetUpdate, RankProfitUpdate, Snapshot
from app.services import sync_service
from utils.constants import CONFIG_KEY_BUDGET, CONFIG_KEY_RANK_PROFIT

logger = get_logger(__name__)
router = APIRouter()

RecordBatch = List[Dict[str, Any]]


@router.get("/data", response_model=Snapshot)
async def get_data(store: RemoteStore = Depends(require_store)):
    """
    Returns users, loans, notifications, budget and rankProfit in
    client shape. Fails as a whole if any table read fails.
    """
    return await sync_service.fetch_snapshot(store)


@router.post("/users", response_model=SuccessResponse)
async def push_users(
    users: RecordBatch = Body(...),
    store: RemoteStore = Depends(require_store),
):
    """Upserts client users one by one."""
    await sync_service.push_users(store, users)
    return SuccessResponse()


@router.post("/loans", response_model=SuccessResponse)
async def push_loans(
    loans: RecordBatch = Body(...),
    store: RemoteStore = Depends(require_store),
):
    """Upserts client loans one by one."""
    await sync_service.push_loans(store, loans)
    return SuccessResponse()


@router.post("/notifications", response_model=SuccessResponse)
async def push_notifications(
    notifications: RecordBatch = Body(...),
    store: RemoteStore = Depends(require_store),
):
    """Upserts client notifications one by one."""
    await sync_service.push_notifications(store, notifications)
    return SuccessResponse()


@router.post("/budget", response_model=SuccessResponse)
async def set_budget(
    payload: BudgetUpdate,
    store: RemoteStore = Depends(require_store),
):
    await sync_service.set_config_value(store, CONFIG_KEY_BUDGET, payload.budget)
    return SuccessResponse()


@router.post("/rankProfit", response_model=SuccessResponse)
async def set_rank_profit(
    payload: RankProfitUpdate,
    store: RemoteStore = Depends(require_store),
):
    await sync_service.set_config_value(store, CONFIG_KEY_RANK_PROFIT, payload.rankProfit)
    return SuccessResponse()


@router.delete("/users/{user_id}", response_model=SuccessResponse)
async def delete_user(
    user_id: str,
    store: RemoteStore = Depends(require_store),
):
    """
    Deletes a user. Dependent loans and notifications are removed by
    the database cascade.
    """
    await sync_service.delete_user(store, user_id)
    return SuccessResponse()
