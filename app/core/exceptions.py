from typing import Optional, Any

class SyncGatewayError(Exception):
    """
    Base exception for the sync gateway.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

class StoreNotConfiguredError(SyncGatewayError):
    """
    Raised when the Supabase secrets are not set.
    """
    def __init__(self, message: str = "Store is not configured", details: Optional[Any] = None):
        super().__init__(message, code="STORE_NOT_CONFIGURED", status_code=500, details=details)

class InvalidStoreConfigError(SyncGatewayError):
    """
    Raised when the secrets are set but no client could be built from them.
    """
    def __init__(self, message: str = "Store configuration is invalid", details: Optional[Any] = None):
        super().__init__(message, code="STORE_CONFIG_INVALID", status_code=500, details=details)

class StoreOperationError(SyncGatewayError):
    """
    Raised when a select, upsert or delete against the store fails.
    The store's own message is kept verbatim.
    """
    def __init__(self, message: str = "Store operation failed", details: Optional[Any] = None):
        super().__init__(message, code="STORE_OPERATION_FAILED", status_code=500, details=details)
