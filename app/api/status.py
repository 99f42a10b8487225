"""
app/api/status.py

Purpose: Store connectivity check for the front-end

- Always answers 200; the payload says whether the store is usable
- Separate messages for missing secrets, a bad URL and a failing query
"""

from fastapi import APIRouter

from app.schemas.response import StoreStatus
from app.services.sync_service import check_store_status

router = APIRouter()


@router.get("/supabase-status", response_model=StoreStatus)
async def supabase_status():
    """
    Reports {connected, error} for the configured Supabase project.
    """
    return await check_store_status()
