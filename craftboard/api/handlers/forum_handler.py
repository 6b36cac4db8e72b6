"""
Forum Reply Handler

    GET    /api/forum/posts/{slug}/replies     ← thread replies, oldest first
    POST   /api/forum/posts/{slug}/replies     ← reply (locked threads: staff only)
    PUT    /api/forum/replies/{reply_id}       ← edit (author or staff)
    DELETE /api/forum/replies/{reply_id}       ← soft delete (author or staff)
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from craftboard.api.dependencies import (
    CurrentPrincipal,
    OptionalPrincipal,
    get_pagination,
    rate_limit,
)
from craftboard.api.dependencies.services import get_forum_reply_service
from craftboard.shared.core.permissions import can_edit
from craftboard.shared.models.enums import ContentModule
from craftboard.shared.schemas.common import ApiResponse, PageInfo, PaginatedData, PaginationParams
from craftboard.shared.schemas.forum import ReplyCreate, ReplyResponse, ReplyUpdate
from craftboard.shared.services.forum_reply_service import ForumReplyService


router = APIRouter()


@router.get("/posts/{slug}/replies", dependencies=[rate_limit("read")])
async def list_replies(
    slug: str,
    principal: OptionalPrincipal,
    pagination: PaginationParams = Depends(get_pagination),
    service: ForumReplyService = Depends(get_forum_reply_service),
):
    replies, total = await service.list_replies(
        principal, slug, page=pagination.page, limit=pagination.limit
    )
    items = [
        ReplyResponse.from_reply(reply, can_edit=can_edit(principal, ContentModule.FORUM, reply))
        for reply in replies
    ]
    return ApiResponse(
        data=PaginatedData(
            items=items,
            pagination=PageInfo.create(page=pagination.page, limit=pagination.limit, total=total),
        )
    )


@router.post(
    "/posts/{slug}/replies",
    status_code=status.HTTP_201_CREATED,
    dependencies=[rate_limit("create")],
)
async def create_reply(
    slug: str,
    data: ReplyCreate,
    principal: CurrentPrincipal,
    service: ForumReplyService = Depends(get_forum_reply_service),
):
    reply = await service.create_reply(principal, slug, data)
    return ApiResponse(
        data=ReplyResponse.from_reply(reply, can_edit=True),
        message="Reply posted successfully",
    )


@router.put("/replies/{reply_id}", dependencies=[rate_limit("update")])
async def update_reply(
    reply_id: UUID,
    data: ReplyUpdate,
    principal: CurrentPrincipal,
    service: ForumReplyService = Depends(get_forum_reply_service),
):
    reply = await service.update_reply(principal, reply_id, data.content)
    return ApiResponse(
        data=ReplyResponse.from_reply(reply, can_edit=True),
        message="Reply updated successfully",
    )


@router.delete("/replies/{reply_id}", dependencies=[rate_limit("delete")])
async def delete_reply(
    reply_id: UUID,
    principal: CurrentPrincipal,
    service: ForumReplyService = Depends(get_forum_reply_service),
):
    await service.delete_reply(principal, reply_id)
    return ApiResponse(message="Reply deleted successfully")
