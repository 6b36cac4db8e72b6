"""
Interaction Handler

    GET  /api/interactions/{content_type}/{slug}   ← current toggle state (optional auth)
    POST /api/interactions/{content_type}/{slug}   ← toggle like/bookmark/share/helpful

Views are not posted here; reading an item counts it.
"""

from fastapi import APIRouter, Depends

from craftboard.api.dependencies import CurrentPrincipal, OptionalPrincipal, rate_limit
from craftboard.api.dependencies.services import get_interaction_service
from craftboard.shared.models.enums import ContentModule
from craftboard.shared.schemas.common import ApiResponse
from craftboard.shared.schemas.interaction import InteractionRequest, InteractionResponse
from craftboard.shared.services.interaction_service import InteractionService


router = APIRouter()


@router.get("/{content_type}/{slug}", dependencies=[rate_limit("read")])
async def get_interactions(
    content_type: ContentModule,
    slug: str,
    principal: OptionalPrincipal,
    service: InteractionService = Depends(get_interaction_service),
):
    """All false when the caller is anonymous; 404 when the item is not visible."""
    state = await service.get_state(principal, content_type, slug)
    return ApiResponse(data=state)


@router.post("/{content_type}/{slug}", dependencies=[rate_limit("toggle")])
async def toggle_interaction(
    content_type: ContentModule,
    slug: str,
    data: InteractionRequest,
    principal: CurrentPrincipal,
    service: InteractionService = Depends(get_interaction_service),
):
    """
    Toggle an interaction.

    Returns the post-mutation counters and the caller's state, so the client
    can render without another read.
    """
    result, item, state = await service.record_interaction(
        principal, content_type, slug, data.action
    )
    return ApiResponse(
        data=InteractionResponse(action=result, stats=item.stats(), interactions=state),
        message=f"{data.action.value} {result.value} successfully",
    )
