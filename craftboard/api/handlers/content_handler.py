"""
Content Handler

CRUD routes for the four content modules, built from one router factory:

    /api/forum/posts        ForumPostCreate   / ForumPostUpdate   / ForumPostResponse
    /api/blog/posts         BlogPostCreate    / BlogPostUpdate    / BlogPostResponse
    /api/wiki/guides        WikiGuideCreate   / WikiGuideUpdate   / WikiGuideResponse
    /api/dex/monsters       DexMonsterCreate  / DexMonsterUpdate  / DexMonsterResponse

Each module also gets ``GET /api/{module}/categories``.

ARCHITECTURE:
=============
    Handler → ContentService → ContentRepository → Model
                    ↘ Permission engine, interaction ledger

Handlers only parse the request, call the service and wrap the result in the
response envelope. Authentication, permission and visibility failures are
raised by the service and rendered by the error middleware.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from craftboard.api.dependencies import (
    CurrentPrincipal,
    OptionalPrincipal,
    get_pagination,
    rate_limit,
)
from craftboard.api.dependencies.services import content_service_for
from craftboard.shared.core.exceptions import RESOURCE_NAMES
from craftboard.shared.models.enums import ContentModule, SortOption
from craftboard.shared.schemas.common import ApiResponse, PageInfo, PaginatedData, PaginationParams
from craftboard.shared.schemas.content import (
    BlogPostCreate,
    BlogPostResponse,
    BlogPostUpdate,
    CategoryCount,
    ContentItemResponse,
    ContentMutationResponse,
    DexMonsterCreate,
    DexMonsterResponse,
    DexMonsterUpdate,
    ForumPostCreate,
    ForumPostResponse,
    ForumPostUpdate,
    WikiGuideCreate,
    WikiGuideResponse,
    WikiGuideUpdate,
)
from craftboard.shared.services.content_service import ContentService, ContentView


def _split_tags(tags: Optional[str]) -> list[str]:
    if not tags:
        return []
    return [tag.strip() for tag in tags.split(",") if tag.strip()]


def create_content_router(
    module: ContentModule,
    collection: str,
    create_schema: type,
    update_schema: type,
    response_schema: type[ContentItemResponse],
) -> APIRouter:
    """
    Build the router for one module.

    Args:
        module: Content module served
        collection: Path segment of the items ("posts", "guides", "monsters")
        create_schema: Request body model for POST
        update_schema: Request body model for PUT
        response_schema: Item response model

    Returns:
        APIRouter to be mounted under ``/api/{module}``
    """
    router = APIRouter()
    get_service = content_service_for(module)
    resource = RESOURCE_NAMES[module.value]

    def render(view: ContentView) -> ContentItemResponse:
        return response_schema.from_item(
            view.item,
            interactions=view.interactions,
            permissions=view.permissions,
        )

    @router.get(f"/{collection}", dependencies=[rate_limit("read")])
    async def list_items(
        principal: OptionalPrincipal,
        pagination: PaginationParams = Depends(get_pagination),
        category: Optional[str] = Query(None, max_length=100),
        search: Optional[str] = Query(None, max_length=200),
        sort_by: SortOption = Query(SortOption.LATEST, alias="sortBy"),
        status_filter: Optional[str] = Query(
            None,
            alias="status",
            pattern="^(published|draft|archived|all)$",
        ),
        tags: Optional[str] = Query(None, description="Comma-separated tags"),
        author: Optional[str] = Query(None, max_length=100),
        service: ContentService = Depends(get_service),
    ):
        """
        List items with filters and pagination.

        ``status`` other than published is only honoured for principals who
        may view drafts.
        """
        page = await service.list_items(
            principal,
            page=pagination.page,
            limit=pagination.limit,
            category=category,
            search=search,
            status=status_filter,
            tags=_split_tags(tags),
            author=author,
            sort=sort_by,
        )
        data = PaginatedData(
            items=[render(view) for view in page.items],
            pagination=PageInfo.create(page=page.page, limit=page.limit, total=page.total),
            filters=page.filters,
        )
        return ApiResponse(data=data)

    @router.get(f"/{collection}/{{slug}}", dependencies=[rate_limit("read")])
    async def get_item(
        slug: str,
        principal: OptionalPrincipal,
        service: ContentService = Depends(get_service),
    ):
        """Get one item by slug; counts a view."""
        view = await service.get_item(principal, slug)
        return ApiResponse(data=render(view))

    @router.post(
        f"/{collection}",
        status_code=status.HTTP_201_CREATED,
        dependencies=[rate_limit("create")],
    )
    async def create_item(
        data: create_schema,
        principal: CurrentPrincipal,
        service: ContentService = Depends(get_service),
    ):
        """Create an item. 401 when anonymous, 403 when the role may not create."""
        view = await service.create_item(principal, data)
        return ApiResponse(data=render(view), message=f"{resource} created successfully")

    @router.put(f"/{collection}/{{slug}}", dependencies=[rate_limit("update")])
    async def update_item(
        slug: str,
        data: update_schema,
        principal: CurrentPrincipal,
        service: ContentService = Depends(get_service),
    ):
        """Partially update an item; a new title may move it to a new slug."""
        view, slug_changed = await service.update_item(principal, slug, data)
        payload = ContentMutationResponse(
            item=render(view),
            slug_changed=slug_changed,
            new_slug=view.item.slug,
        )
        return ApiResponse(data=payload, message=f"{resource} updated successfully")

    @router.delete(f"/{collection}/{{slug}}", dependencies=[rate_limit("delete")])
    async def delete_item(
        slug: str,
        principal: CurrentPrincipal,
        service: ContentService = Depends(get_service),
    ):
        """Soft delete an item."""
        await service.delete_item(principal, slug)
        return ApiResponse(message=f"{resource} deleted successfully")

    @router.get("/categories", dependencies=[rate_limit("read")])
    async def list_categories(
        principal: OptionalPrincipal,
        service: ContentService = Depends(get_service),
    ):
        """Published item counts per category, plus the caller's capabilities."""
        categories = [CategoryCount(**entry) for entry in await service.categories()]
        return ApiResponse(
            data={
                "categories": categories,
                "permissions": service.permissions(principal),
            }
        )

    return router


forum_router = create_content_router(
    ContentModule.FORUM, "posts", ForumPostCreate, ForumPostUpdate, ForumPostResponse
)
blog_router = create_content_router(
    ContentModule.BLOG, "posts", BlogPostCreate, BlogPostUpdate, BlogPostResponse
)
wiki_router = create_content_router(
    ContentModule.WIKI, "guides", WikiGuideCreate, WikiGuideUpdate, WikiGuideResponse
)
dex_router = create_content_router(
    ContentModule.DEX, "monsters", DexMonsterCreate, DexMonsterUpdate, DexMonsterResponse
)
