"""
utils/constants.py

Purpose: Centralized static content

- User-facing status messages (shown by the front-end as-is, Vietnamese)
- Table-independent keys shared by the handlers

(Prevents hardcoding across the codebase)
"""

# ============================================================
# STORE STATUS MESSAGES
# ============================================================

STORE_SECRETS_MISSING_MESSAGE = (
    "Thiếu biến môi trường SUPABASE_URL hoặc SUPABASE_SERVICE_ROLE_KEY. "
    "Vui lòng cấu hình trong AI Studio."
)

STORE_URL_INVALID_MESSAGE = "URL Supabase không hợp lệ (phải bắt đầu bằng https://)"

STORE_CONNECTION_FAILED_MESSAGE = "Lỗi kết nối Supabase"

STORE_NOT_INITIALIZED_MESSAGE = (
    "Supabase client not initialized. Check your environment variables."
)

# ============================================================
# SYSTEM CONFIG KEYS
# ============================================================

CONFIG_KEY_BUDGET = "budget"
CONFIG_KEY_RANK_PROFIT = "rankProfit"

# Column probed by the connectivity check
STATUS_PROBE_COLUMN = "key"
