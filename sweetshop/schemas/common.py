"""Response Envelope — success wrapper shared by every endpoint."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """{"success": true, "message": ..., "data": ...}"""
    success: bool = True
    message: str
    data: T | None = None
