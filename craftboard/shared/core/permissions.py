"""
Permission Engine

Single source of truth for who may create, edit, delete, or see drafts of
content in each module. Every mutating route goes through these functions
before touching storage.

Policy Table:
=============
┌────────┬──────────────────────┬────────────────────┬──────────────────┬──────────────────┐
│ module │ create               │ edit / delete any  │ edit / delete own│ view drafts      │
├────────┼──────────────────────┼────────────────────┼──────────────────┼──────────────────┤
│ forum  │ admin mod vip member │ admin mod          │ vip member       │ admin mod        │
│ blog   │ admin                │ admin              │ -                │ admin            │
│ wiki   │ admin                │ admin              │ -                │ admin            │
│ dex    │ admin                │ admin              │ -                │ admin            │
└────────┴──────────────────────┴────────────────────┴──────────────────┴──────────────────┘

Anonymous and banned principals get False everywhere. An item whose author
cannot be determined never grants ownership.

Usage:
======
    from craftboard.shared.core.permissions import Principal, can_edit

    principal = Principal(id="42", role=Role.MEMBER)
    if not can_edit(principal, ContentModule.FORUM, post):
        raise AuthorizationError("You do not have permission to edit this post")
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union
from uuid import UUID

from craftboard.shared.models.enums import ContentModule, Role


@dataclass(frozen=True)
class Principal:
    """
    The actor behind a request, reduced to what the engine needs.

    Built per request from the bearer token and the user row; never stored.
    """

    id: str
    role: Role
    name: Optional[str] = None
    avatar: Optional[str] = None

    @property
    def is_banned(self) -> bool:
        return self.role is Role.BANNED

    @property
    def is_staff(self) -> bool:
        return self.role in (Role.ADMIN, Role.MODERATOR)


@dataclass(frozen=True)
class ModulePolicy:
    """Role sets for one module."""

    create: frozenset[Role]
    manage_any: frozenset[Role]
    manage_own: frozenset[Role]
    view_drafts: frozenset[Role]


_ADMIN_ONLY = ModulePolicy(
    create=frozenset({Role.ADMIN}),
    manage_any=frozenset({Role.ADMIN}),
    manage_own=frozenset(),
    view_drafts=frozenset({Role.ADMIN}),
)

POLICIES: dict[ContentModule, ModulePolicy] = {
    ContentModule.FORUM: ModulePolicy(
        create=frozenset({Role.ADMIN, Role.MODERATOR, Role.VIP, Role.MEMBER}),
        manage_any=frozenset({Role.ADMIN, Role.MODERATOR}),
        manage_own=frozenset({Role.VIP, Role.MEMBER}),
        view_drafts=frozenset({Role.ADMIN, Role.MODERATOR}),
    ),
    ContentModule.BLOG: _ADMIN_ONLY,
    ContentModule.WIKI: _ADMIN_ONLY,
    ContentModule.DEX: _ADMIN_ONLY,
}


@dataclass(frozen=True)
class ContentPermissions:
    """Capability set for one principal on one module (and optionally one item)."""

    can_create: bool
    can_edit: bool
    can_delete: bool
    can_view_drafts: bool

    def to_dict(self) -> dict[str, bool]:
        return {
            "canCreate": self.can_create,
            "canEdit": self.can_edit,
            "canDelete": self.can_delete,
            "canViewDrafts": self.can_view_drafts,
        }


ModuleLike = Union[ContentModule, str]


# ═══════════════════════════════════════════════════════════════════════════════
# HELPERS
# ═══════════════════════════════════════════════════════════════════════════════


def _policy(module: ModuleLike) -> Optional[ModulePolicy]:
    try:
        return POLICIES[ContentModule(module)]
    except ValueError:
        return None


def _active(principal: Optional[Principal]) -> bool:
    return principal is not None and not principal.is_banned


def author_id_of(item: Any) -> Optional[str]:
    """
    Extract the author id from an ORM row or a mapping.

    Accepts objects with an ``author_id`` attribute and mappings shaped
    either ``{"author_id": ...}`` or ``{"author": {"id": ...}}``. Returns
    None for anything else, including empty or non-scalar ids.
    """
    if item is None:
        return None

    if isinstance(item, Mapping):
        raw = item.get("author_id")
        if raw is None:
            author = item.get("author")
            raw = author.get("id") if isinstance(author, Mapping) else None
    else:
        raw = getattr(item, "author_id", None)

    if isinstance(raw, (str, UUID, int)) and not isinstance(raw, bool):
        value = str(raw)
        return value or None
    return None


def _manages(principal: Optional[Principal], module: ModuleLike, item: Any) -> bool:
    policy = _policy(module)
    if policy is None or not _active(principal):
        return False
    if principal.role in policy.manage_any:
        return True
    if principal.role in policy.manage_own:
        author_id = author_id_of(item)
        return author_id is not None and author_id == str(principal.id)
    return False


# ═══════════════════════════════════════════════════════════════════════════════
# PUBLIC CONTRACT
# ═══════════════════════════════════════════════════════════════════════════════


def can_create(principal: Optional[Principal], module: ModuleLike) -> bool:
    policy = _policy(module)
    return policy is not None and _active(principal) and principal.role in policy.create


def can_view_drafts(principal: Optional[Principal], module: ModuleLike) -> bool:
    """
    Whether non-published items of ``module`` are visible to the principal.

    Authorship does not matter here: a member cannot see their own draft.
    """
    policy = _policy(module)
    return policy is not None and _active(principal) and principal.role in policy.view_drafts


def can_edit(principal: Optional[Principal], module: ModuleLike, item: Any) -> bool:
    return _manages(principal, module, item)


def can_delete(principal: Optional[Principal], module: ModuleLike, item: Any) -> bool:
    return _manages(principal, module, item)


def get_content_permissions(
    principal: Optional[Principal],
    module: ModuleLike,
    item: Any = None,
) -> ContentPermissions:
    """
    Full capability set, as rendered next to a listing or a detail page.

    Without an item, edit/delete reflect only the "manage any" rights.
    """
    return ContentPermissions(
        can_create=can_create(principal, module),
        can_edit=can_edit(principal, module, item),
        can_delete=can_delete(principal, module, item),
        can_view_drafts=can_view_drafts(principal, module),
    )
