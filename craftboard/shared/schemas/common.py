"""
Common Schemas

Shared schemas used across the application for consistent API responses.

Schema Types:
=============
- BaseSchema: camelCase on the wire, snake_case in Python, ORM-friendly
- ApiResponse[T]: The uniform envelope {success, data, message}
- PageInfo: {page, limit, total, pages, hasNext, hasPrev}
- ErrorResponse: {success: false, error, code, details}

Usage:
======
    from craftboard.shared.schemas.common import ApiResponse, PageInfo

    return ApiResponse(data=payload, message="Forum post created successfully")
"""

from datetime import datetime, timezone
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# Generic type for envelope payloads
DataT = TypeVar("DataT")


class BaseSchema(BaseModel):
    """
    Base schema with common configuration.

    - alias_generator=to_camel: ``is_pinned`` is ``isPinned`` in JSON
    - populate_by_name: request bodies may use either spelling
    - from_attributes: build from ORM rows
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        protected_namespaces=(),
    )


# ═══════════════════════════════════════════════════════════════════════════════
# ENVELOPE
# ═══════════════════════════════════════════════════════════════════════════════


class ApiResponse(BaseSchema, Generic[DataT]):
    """
    Uniform success envelope.

    Example:
        {"success": true, "data": {...}, "message": "like added successfully"}
    """

    success: bool = True
    data: Optional[DataT] = None
    message: Optional[str] = None


class ErrorResponse(BaseSchema):
    """
    Uniform error envelope (documented for OpenAPI; produced by the
    exception handlers).
    """

    success: bool = False
    error: str = Field(description="Human-readable error message")
    code: str = Field(description="Machine-readable error code")
    details: Optional[dict[str, Any]] = None


# ═══════════════════════════════════════════════════════════════════════════════
# PAGINATION
# ═══════════════════════════════════════════════════════════════════════════════


class PaginationParams(BaseModel):
    """
    Pagination query parameters (1-based page, bounded limit).
    """

    page: int = Field(default=1, ge=1, description="Page number (1-indexed)")
    limit: int = Field(default=20, ge=1, le=100, description="Items per page")

    @property
    def offset(self) -> int:
        """Calculate offset for database query."""
        return (self.page - 1) * self.limit


class PageInfo(BaseSchema):
    """Pagination metadata in response."""

    page: int
    limit: int
    total: int
    pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def create(cls, page: int, limit: int, total: int) -> "PageInfo":
        """
        Build pagination meta, deriving page count and neighbours.

        Example:
            PageInfo.create(page=2, limit=20, total=45)
            # pages=3, hasNext=True, hasPrev=True
        """
        pages = (total + limit - 1) // limit if limit > 0 else 0
        return cls(
            page=page,
            limit=limit,
            total=total,
            pages=pages,
            has_next=page < pages,
            has_prev=page > 1,
        )


class PaginatedData(BaseSchema, Generic[DataT]):
    """Listing payload: one page of items plus the filters that produced it."""

    items: list[DataT]
    pagination: PageInfo
    filters: dict[str, Any] = Field(default_factory=dict)


# ═══════════════════════════════════════════════════════════════════════════════
# HEALTH CHECK
# ═══════════════════════════════════════════════════════════════════════════════


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = "healthy"
    service: str = "craftboard"
    version: str = "1.0.0"
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
