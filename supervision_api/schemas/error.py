from datetime import datetime

from pydantic import BaseModel


class ErrorObject(BaseModel):
    """Canonical error payload object"""
    code: str
    message: str
    details: list | dict | None = None


class ErrorResponse(BaseModel):
    """Top-level API error response envelope"""
    success: bool = False
    error: ErrorObject
    timestamp: datetime
    path: str
