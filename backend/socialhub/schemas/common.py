"""
SocialHub Backend — Shared Schemas
===================================

What:  Error, health, message and pagination envelopes used by every router.
"""

import math
from typing import Generic, List, Optional, Sequence, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Fields:
        error: Machine-readable error code (e.g., "conflict", "not_found")
        message: Human-readable description for display to users
        details: Optional extra context (e.g., which field collided)
        request_id: Correlation ID for tracing this error in server logs
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class MessageResponse(BaseModel):
    """Plain acknowledgement returned by delete/unfollow/unlike endpoints."""
    message: str


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


class PageParams(BaseModel):
    """
    Offset pagination window.

    page: 0-based page index
    size: items per page (1-100)
    """
    page: int = Field(default=0, ge=0)
    size: int = Field(default=10, ge=1, le=100)

    @property
    def offset(self) -> int:
        return self.page * self.size


class Page(BaseModel, Generic[T]):
    """
    A fixed-size window of an ordered result plus total-count metadata.

    Example:
        {"items": [...], "total": 42, "page": 1, "size": 10, "total_pages": 5}
    """
    items: List[T] = Field(description="Items on this page")
    total: int = Field(description="Total number of items across all pages")
    page: int = Field(description="0-based page index")
    size: int = Field(description="Requested page size")
    total_pages: int = Field(description="Number of pages for this size")

    @classmethod
    def build(cls, items: Sequence[T], total: int, params: PageParams) -> "Page[T]":
        return cls(
            items=list(items),
            total=total,
            page=params.page,
            size=params.size,
            total_pages=math.ceil(total / params.size) if total else 0,
        )
