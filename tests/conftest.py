"""Pytest configuration and fixtures."""

import copy

import pytest
from fastapi.testclient import TestClient

import app.db.supabase as supabase_db
from app.core.config import settings
from app.core.exceptions import StoreOperationError
from app.db.supabase import require_store
from app.main import app


class FakeStore:
    """
    In-memory stand-in for RemoteStore.

    Rows are kept per table and upserted by primary key ("key" for
    system_config, "id" elsewhere). Failures are injected per table
    for reads and by call number for writes.
    """

    def __init__(self, tables=None):
        self.tables = copy.deepcopy(tables or {})
        self.select_failures = {}
        self.upsert_failures = {}
        self.selects = []
        self.upserts = []
        self.deletes = []

    @staticmethod
    def _key_column(table):
        return "key" if table == settings.CONFIG_TABLE else "id"

    async def select(self, table, columns="*", filters=None, limit=None):
        self.selects.append((table, columns, limit))
        if table in self.select_failures:
            raise StoreOperationError(self.select_failures[table])
        rows = [dict(row) for row in self.tables.get(table, [])]
        for column, value in (filters or {}).items():
            rows = [row for row in rows if row.get(column) == value]
        return rows[:limit] if limit is not None else rows

    async def upsert(self, table, record):
        call_number = len(self.upserts) + 1
        self.upserts.append((table, dict(record)))
        if call_number in self.upsert_failures:
            raise StoreOperationError(self.upsert_failures[call_number])

        key = self._key_column(table)
        rows = self.tables.setdefault(table, [])
        for index, row in enumerate(rows):
            if row.get(key) == record.get(key):
                rows[index] = dict(record)
                break
        else:
            rows.append(dict(record))

    async def delete(self, table, record_id):
        self.deletes.append((table, record_id))
        rows = self.tables.get(table, [])
        self.tables[table] = [row for row in rows if row.get("id") != record_id]


@pytest.fixture
def fake_store() -> FakeStore:
    """Empty in-memory store."""
    return FakeStore()


@pytest.fixture
def configured(monkeypatch):
    """Both Supabase secrets set and no cached handle."""
    monkeypatch.setattr(settings, "SUPABASE_URL", "https://project.supabase.co")
    monkeypatch.setattr(settings, "SUPABASE_SERVICE_ROLE_KEY", "service-role-key")
    monkeypatch.setattr(supabase_db, "_store", None)


@pytest.fixture
def unconfigured(monkeypatch):
    """No Supabase secrets and no cached handle."""
    monkeypatch.setattr(settings, "SUPABASE_URL", None)
    monkeypatch.setattr(settings, "SUPABASE_SERVICE_ROLE_KEY", None)
    monkeypatch.setattr(supabase_db, "_store", None)


@pytest.fixture
def client():
    """Test client without any store override (lifespan not run)."""
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def store_client(fake_store, configured):
    """Test client whose handlers receive the fake store."""
    app.dependency_overrides[require_store] = lambda: fake_store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_user() -> dict:
    """Client-shaped user."""
    return {
        "id": "u-001",
        "phone": "0901234567",
        "fullName": "Nguyen Van A",
        "idNumber": "079123456789",
        "balance": 5_000_000,
        "totalLimit": 10_000_000,
        "rank": "silver",
        "rankProgress": 3,
        "isLoggedIn": True,
        "isAdmin": False,
        "pendingUpgradeRank": None,
        "rankUpgradeBill": None,
        "address": "12 Le Loi, District 1",
        "joinDate": "2024-01-15",
        "idFront": "https://cdn.example.com/u-001/front.jpg",
        "idBack": "https://cdn.example.com/u-001/back.jpg",
        "refZalo": "0907654321",
        "relationship": "sibling",
        "lastLoanSeq": 2,
        "bankName": "VCB",
        "bankAccountNumber": "0011002233",
        "bankAccountHolder": "NGUYEN VAN A",
        "updatedAt": 1_700_000_000_000,
    }


@pytest.fixture
def sample_loan() -> dict:
    """Client-shaped loan."""
    return {
        "id": "L-0001",
        "userId": "u-001",
        "userName": "Nguyen Van A",
        "amount": 2_000_000,
        "date": "2024-03-01",
        "createdAt": "2024-03-01T08:00:00Z",
        "status": "PENDING",
        "fine": 0,
        "billImage": None,
        "signature": "data:image/png;base64,AAAA",
        "rejectionReason": None,
        "updatedAt": 1_700_000_100_000,
    }


@pytest.fixture
def sample_notification() -> dict:
    """Client-shaped notification."""
    return {
        "id": "n-001",
        "userId": "u-001",
        "title": "Loan approved",
        "message": "Your loan L-0001 was approved",
        "time": "08:00 01/03/2024",
        "read": False,
        "type": "LOAN",
    }
