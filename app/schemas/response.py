"""
app/schemas/response.py

Purpose: Shared response bodies

- Error envelope used by every exception handler
- Success acknowledgement for write endpoints
- Store connectivity status
"""

from pydantic import BaseModel
from typing import Optional, Any


class ErrorResponse(BaseModel):
    """
    Standard error response structure.
    """
    error: str
    code: str
    details: Optional[Any] = None


class SuccessResponse(BaseModel):
    success: bool = True


class StoreStatus(BaseModel):
    """
    Result of the connectivity probe. `error` is None when connected.
    """
    connected: bool
    error: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {"connected": False, "error": "Lỗi kết nối Supabase"}
        }
