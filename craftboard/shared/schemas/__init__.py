"""
Pydantic Schemas

Request and response models for the API.

Schema Categories:
==================
- common: Base schema, envelope, pagination, health
- user: OAuth sign-in and profile
- content: Create/update/response models per content module
- forum: Thread replies
- interaction: Toggle requests and interaction state
- stats: Module aggregates

Usage:
======
    from craftboard.shared.schemas import ApiResponse, ForumPostCreate
"""

from craftboard.shared.schemas.common import (
    ApiResponse,
    BaseSchema,
    ErrorResponse,
    HealthResponse,
    PageInfo,
    PaginatedData,
    PaginationParams,
)
from craftboard.shared.schemas.user import AuthResponse, OAuthCallbackRequest, UserResponse
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
from craftboard.shared.schemas.forum import ReplyCreate, ReplyResponse, ReplyUpdate
from craftboard.shared.schemas.interaction import (
    InteractionRequest,
    InteractionResponse,
    InteractionState,
)
from craftboard.shared.schemas.stats import ModuleStats

__all__ = [
    # Common
    "ApiResponse",
    "BaseSchema",
    "ErrorResponse",
    "HealthResponse",
    "PageInfo",
    "PaginatedData",
    "PaginationParams",
    # User
    "AuthResponse",
    "OAuthCallbackRequest",
    "UserResponse",
    # Content
    "BlogPostCreate",
    "BlogPostResponse",
    "BlogPostUpdate",
    "CategoryCount",
    "ContentItemResponse",
    "ContentMutationResponse",
    "DexMonsterCreate",
    "DexMonsterResponse",
    "DexMonsterUpdate",
    "ForumPostCreate",
    "ForumPostResponse",
    "ForumPostUpdate",
    "WikiGuideCreate",
    "WikiGuideResponse",
    "WikiGuideUpdate",
    # Forum
    "ReplyCreate",
    "ReplyResponse",
    "ReplyUpdate",
    # Interaction
    "InteractionRequest",
    "InteractionResponse",
    "InteractionState",
    # Stats
    "ModuleStats",
]
