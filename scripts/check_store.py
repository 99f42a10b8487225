"""
Quick check that the configured Supabase project is reachable

Runs the same probe as GET /api/supabase-status and prints the row
counts of the synced tables.

Run: python scripts/check_store.py
"""

import asyncio
import sys
from pathlib import Path
from dotenv import load_dotenv

sys.path.insert(0, str(Path(__file__).parent.parent))

# Load environment variables before settings are read
load_dotenv()

import logging

from app.core.config import settings
from app.core.exceptions import StoreOperationError
from app.db.supabase import get_store
from app.services.sync_service import check_store_status

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
logger = logging.getLogger(__name__)

TABLES = (
    settings.USERS_TABLE,
    settings.LOANS_TABLE,
    settings.NOTIFICATIONS_TABLE,
    settings.CONFIG_TABLE,
)


async def check_store() -> bool:
    """Probe the store and report table sizes."""
    print("=" * 60)
    print("  Supabase Connection Check")
    print("=" * 60 + "\n")

    status = await check_store_status()
    if not status.connected:
        logger.error(f"❌ Not connected: {status.error}")
        return False

    logger.info("✅ Connection successful!\n")

    store = await get_store()
    for table in TABLES:
        try:
            rows = await store.select(table, "id" if table != settings.CONFIG_TABLE else "key")
        except StoreOperationError as e:
            logger.error(f"❌ {table}: {e.message}")
            return False
        logger.info(f"📦 {table}: {len(rows)} row(s)")

    print("\n" + "=" * 60)
    return True


if __name__ == "__main__":
    ok = asyncio.run(check_store())
    sys.exit(0 if ok else 1)
