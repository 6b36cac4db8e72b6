"""
Pagination dependency.
"""
from fastapi import Query

from craftboard.shared.schemas.common import PaginationParams


async def get_pagination(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    limit: int = Query(20, ge=1, le=100, description="Items per page"),
) -> PaginationParams:
    """Pagination parameters dependency."""
    return PaginationParams(page=page, limit=limit)
