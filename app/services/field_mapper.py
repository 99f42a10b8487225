"""
app/services/field_mapper.py

Purpose: Storage <-> client record translation

- Storage rows use snake_case columns, the browser client uses camelCase
- One FieldMap per entity kind (user, loan, notification)
- Pure functions, no I/O
- updated_at always leaves as a number

Wire format: reads send only the camelCase name of a mapped column
(fullName, not full_name). Unmapped columns keep their storage name.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from utils.time_utils import now_ms
from utils.validation_utils import Number, to_number

Record = Dict[str, Any]


@dataclass(frozen=True)
class FieldMap:
    """
    Column layout of one entity kind.

    `columns` is the full storage column set written on push, in write
    order. `renames` maps storage column -> client field for every
    column whose name differs; any other column keeps its name.
    """
    entity: str
    columns: Tuple[str, ...]
    renames: Dict[str, str] = field(default_factory=dict)
    numeric: Tuple[str, ...] = ()
    stamped: Optional[str] = None

    def client_key(self, column: str) -> str:
        return self.renames.get(column, column)

    @property
    def client_to_storage(self) -> Dict[str, str]:
        return {self.client_key(column): column for column in self.columns}


USER_FIELDS = FieldMap(
    entity="user",
    columns=(
        "id",
        "phone",
        "full_name",
        "id_number",
        "balance",
        "total_limit",
        "rank",
        "rank_progress",
        "is_logged_in",
        "is_admin",
        "pending_upgrade_rank",
        "rank_upgrade_bill",
        "address",
        "join_date",
        "id_front",
        "id_back",
        "ref_zalo",
        "relationship",
        "last_loan_seq",
        "bank_name",
        "bank_account_number",
        "bank_account_holder",
        "updated_at",
    ),
    renames={
        "full_name": "fullName",
        "id_number": "idNumber",
        "total_limit": "totalLimit",
        "rank_progress": "rankProgress",
        "is_logged_in": "isLoggedIn",
        "is_admin": "isAdmin",
        "pending_upgrade_rank": "pendingUpgradeRank",
        "rank_upgrade_bill": "rankUpgradeBill",
        "join_date": "joinDate",
        "id_front": "idFront",
        "id_back": "idBack",
        "ref_zalo": "refZalo",
        "last_loan_seq": "lastLoanSeq",
        "bank_name": "bankName",
        "bank_account_number": "bankAccountNumber",
        "bank_account_holder": "bankAccountHolder",
        "updated_at": "updatedAt",
    },
    numeric=("updated_at",),
    stamped="updated_at",
)

LOAN_FIELDS = FieldMap(
    entity="loan",
    columns=(
        "id",
        "user_id",
        "user_name",
        "amount",
        "date",
        "created_at",
        "status",
        "fine",
        "bill_image",
        "signature",
        "rejection_reason",
        "updated_at",
    ),
    renames={
        "user_id": "userId",
        "user_name": "userName",
        "created_at": "createdAt",
        "rejection_reason": "rejectionReason",
        "bill_image": "billImage",
        "updated_at": "updatedAt",
    },
    numeric=("updated_at",),
    stamped="updated_at",
)

NOTIFICATION_FIELDS = FieldMap(
    entity="notification",
    columns=("id", "user_id", "title", "message", "time", "read", "type"),
    renames={"user_id": "userId"},
)


def to_client(mapping: FieldMap, row: Record) -> Record:
    """
    Converts a storage row to client shape.

    Mapped columns are renamed, numeric columns are coerced and unknown
    columns pass through unchanged.
    """
    record = {}
    for column, value in row.items():
        if column in mapping.numeric:
            value = to_number(value)
        record[mapping.client_key(column)] = value

    for column in mapping.numeric:
        record.setdefault(mapping.client_key(column), 0)

    return record


def to_storage(mapping: FieldMap, record: Record) -> Record:
    """
    Converts a client record to storage shape.

    Only declared columns are written; client fields without a storage
    column are dropped. A missing or falsy update stamp becomes the
    current time in epoch milliseconds.
    """
    lookup = mapping.client_to_storage
    row = {
        lookup[key]: value
        for key, value in record.items()
        if key in lookup
    }

    if mapping.stamped and not row.get(mapping.stamped):
        row[mapping.stamped] = now_ms()

    return row


def to_client_all(mapping: FieldMap, rows: Optional[Iterable[Record]]) -> List[Record]:
    return [to_client(mapping, row) for row in rows or []]


def user_to_client(row: Record) -> Record:
    return to_client(USER_FIELDS, row)


def user_to_storage(record: Record) -> Record:
    return to_storage(USER_FIELDS, record)


def loan_to_client(row: Record) -> Record:
    return to_client(LOAN_FIELDS, row)


def loan_to_storage(record: Record) -> Record:
    return to_storage(LOAN_FIELDS, record)


def notification_to_client(row: Record) -> Record:
    return to_client(NOTIFICATION_FIELDS, row)


def notification_to_storage(record: Record) -> Record:
    return to_storage(NOTIFICATION_FIELDS, record)


def config_value(rows: Optional[Iterable[Record]], key: str, default: Number) -> Number:
    """
    Reads a numeric value from system_config rows.

    Args:
        rows: system_config rows ({"key": ..., "value": ...})
        key: Config key to look up
        default: Value used when the row is missing or empty

    Returns:
        The stored value as a number
    """
    for row in rows or []:
        if row.get("key") == key:
            value = row.get("value")
            if value is None or value == "":
                return default
            return to_number(value, default)
    return default
