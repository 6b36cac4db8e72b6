"""
Interaction Schemas

Request/response models for the interaction ledger endpoints.
"""

from pydantic import Field, field_validator

from craftboard.shared.models.enums import InteractionAction, InteractionResult
from craftboard.shared.schemas.common import BaseSchema


class InteractionState(BaseSchema):
    """Which toggles the requesting user currently has on an item."""

    is_liked: bool = False
    is_bookmarked: bool = False
    is_shared: bool = False
    is_helpful: bool = False

    @classmethod
    def from_actions(cls, actions: set[InteractionAction]) -> "InteractionState":
        return cls(
            is_liked=InteractionAction.LIKE in actions,
            is_bookmarked=InteractionAction.BOOKMARK in actions,
            is_shared=InteractionAction.SHARE in actions,
            is_helpful=InteractionAction.HELPFUL in actions,
        )


class InteractionRequest(BaseSchema):
    """Body of POST /api/interactions/{type}/{slug}."""

    action: InteractionAction = Field(description="like | bookmark | share | helpful")

    @field_validator("action")
    @classmethod
    def action_must_toggle(cls, value: InteractionAction) -> InteractionAction:
        if not value.is_toggle:
            raise ValueError("Views are recorded by reading the item, not posted")
        return value


class InteractionResponse(BaseSchema):
    """Result of a toggle: post-mutation counters and state."""

    action: InteractionResult
    stats: dict[str, int]
    interactions: InteractionState
