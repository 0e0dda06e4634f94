"""
Standard API Response Wrappers
Generic response schemas for API endpoints.
"""

from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    success: bool = Field(description="Whether the operation was successful")
    data: Optional[T] = Field(default=None, description="Response data")
    message: str = Field(default="", description="Response message")

    @classmethod
    def ok(cls, data: Any = None, message: str = "Success") -> "ApiResponse":
        """Create a successful response."""
        return cls(success=True, data=data, message=message)


class ErrorBody(BaseModel):
    """Error payload."""

    code: str = Field(description="Error code")
    message: str = Field(description="Error message")
    details: Dict[str, Any] = Field(default_factory=dict, description="Additional error details")


class ErrorResponse(BaseModel):
    """Error response."""

    success: bool = False
    error: ErrorBody
