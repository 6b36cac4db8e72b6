"""
Stats Handler

    GET /api/stats/{module}   ← totals over live published items of a module
"""

from fastapi import APIRouter, Depends

from craftboard.api.dependencies import rate_limit
from craftboard.api.dependencies.services import get_stats_service
from craftboard.shared.models.enums import ContentModule
from craftboard.shared.schemas.common import ApiResponse
from craftboard.shared.schemas.stats import ModuleStats
from craftboard.shared.services.stats_service import StatsService


router = APIRouter()


@router.get("/{module}", dependencies=[rate_limit("read")])
async def module_stats(
    module: ContentModule,
    service: StatsService = Depends(get_stats_service),
):
    """Unknown modules fail path validation (400)."""
    totals = await service.module_stats(module)
    stats = ModuleStats.model_validate({"module": module, **totals})
    # Totals a module does not carry (helpfuls outside the wiki) are omitted
    return ApiResponse(data=stats.model_dump(mode="json", by_alias=True, exclude_none=True))
