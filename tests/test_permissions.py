"""Permission engine: the role/module matrix and ownership rules."""

import itertools
import uuid

import pytest

from craftboard.shared.core.permissions import (
    Principal,
    author_id_of,
    can_create,
    can_delete,
    can_edit,
    can_view_drafts,
    get_content_permissions,
)
from craftboard.shared.models.enums import ContentModule, Role


OWNER_ID = str(uuid.uuid4())
OTHER_ID = str(uuid.uuid4())


def principal(role: Role, user_id: str = OWNER_ID) -> Principal:
    return Principal(id=user_id, role=role, name=role.value)


OWN_ITEM = {"author_id": OWNER_ID}


# (role, module) → (create, edit/delete own, edit/delete others', view drafts)
EXPECTED = {
    (Role.ADMIN, ContentModule.FORUM): (True, True, True, True),
    (Role.ADMIN, ContentModule.BLOG): (True, True, True, True),
    (Role.ADMIN, ContentModule.WIKI): (True, True, True, True),
    (Role.ADMIN, ContentModule.DEX): (True, True, True, True),
    (Role.MODERATOR, ContentModule.FORUM): (True, True, True, True),
    (Role.MODERATOR, ContentModule.BLOG): (False, False, False, False),
    (Role.MODERATOR, ContentModule.WIKI): (False, False, False, False),
    (Role.MODERATOR, ContentModule.DEX): (False, False, False, False),
    (Role.VIP, ContentModule.FORUM): (True, True, False, False),
    (Role.VIP, ContentModule.BLOG): (False, False, False, False),
    (Role.VIP, ContentModule.WIKI): (False, False, False, False),
    (Role.VIP, ContentModule.DEX): (False, False, False, False),
    (Role.MEMBER, ContentModule.FORUM): (True, True, False, False),
    (Role.MEMBER, ContentModule.BLOG): (False, False, False, False),
    (Role.MEMBER, ContentModule.WIKI): (False, False, False, False),
    (Role.MEMBER, ContentModule.DEX): (False, False, False, False),
    (Role.BANNED, ContentModule.FORUM): (False, False, False, False),
    (Role.BANNED, ContentModule.BLOG): (False, False, False, False),
    (Role.BANNED, ContentModule.WIKI): (False, False, False, False),
    (Role.BANNED, ContentModule.DEX): (False, False, False, False),
}


def test_matrix_covers_every_role_and_module():
    assert set(EXPECTED) == set(itertools.product(Role, ContentModule))


@pytest.mark.parametrize(
    "role, module, owns_item",
    list(itertools.product(Role, ContentModule, (True, False))),
)
def test_permission_matrix(role, module, owns_item):
    create, manage_own, manage_any, view_drafts = EXPECTED[(role, module)]
    user = principal(role, OWNER_ID if owns_item else OTHER_ID)
    manage = manage_own if owns_item else manage_any

    assert can_create(user, module) is create
    assert can_edit(user, module, OWN_ITEM) is manage
    assert can_delete(user, module, OWN_ITEM) is manage
    assert can_view_drafts(user, module) is view_drafts


def test_anonymous_gets_nothing():
    for module in ContentModule:
        assert can_create(None, module) is False
        assert can_edit(None, module, OWN_ITEM) is False
        assert can_delete(None, module, OWN_ITEM) is False
        assert can_view_drafts(None, module) is False


def test_banned_cannot_touch_own_item():
    banned = principal(Role.BANNED)

    assert can_edit(banned, ContentModule.FORUM, OWN_ITEM) is False
    assert can_delete(banned, ContentModule.FORUM, OWN_ITEM) is False


@pytest.mark.parametrize("role", [Role.MEMBER, Role.VIP])
def test_forum_owner_may_edit_own_post_only(role):
    assert can_edit(principal(role), ContentModule.FORUM, OWN_ITEM) is True
    assert can_delete(principal(role), ContentModule.FORUM, OWN_ITEM) is True
    assert can_edit(principal(role, OTHER_ID), ContentModule.FORUM, OWN_ITEM) is False


@pytest.mark.parametrize("role", [Role.ADMIN, Role.MODERATOR])
def test_forum_staff_manage_any_post(role):
    someone_elses = {"author_id": OTHER_ID}

    assert can_edit(principal(role), ContentModule.FORUM, someone_elses) is True
    assert can_delete(principal(role), ContentModule.FORUM, someone_elses) is True


def test_moderator_cannot_manage_blog():
    item = {"author_id": OWNER_ID}

    assert can_edit(principal(Role.MODERATOR), ContentModule.BLOG, item) is False
    assert can_edit(principal(Role.ADMIN, OTHER_ID), ContentModule.BLOG, item) is True


def test_admin_only_modules_ignore_ownership():
    for module in (ContentModule.BLOG, ContentModule.WIKI, ContentModule.DEX):
        assert can_edit(principal(Role.MEMBER), module, OWN_ITEM) is False


def test_unknown_module_denies_everything():
    admin = principal(Role.ADMIN)

    assert can_create(admin, "shop") is False
    assert can_edit(admin, "shop", OWN_ITEM) is False
    assert can_view_drafts(admin, "shop") is False


@pytest.mark.parametrize(
    "item, expected",
    [
        ({"author_id": OWNER_ID}, OWNER_ID),
        ({"author": {"id": OWNER_ID}}, OWNER_ID),
        ({"author": "not-a-mapping"}, None),
        ({"author_id": ""}, None),
        ({"author_id": ["x"]}, None),
        ({}, None),
        (None, None),
    ],
)
def test_author_id_of(item, expected):
    assert author_id_of(item) == expected


def test_item_without_author_never_grants_ownership():
    member = principal(Role.MEMBER)

    assert can_edit(member, ContentModule.FORUM, {}) is False
    assert can_edit(member, ContentModule.FORUM, None) is False


def test_author_id_accepts_uuid_objects():
    class Row:
        author_id = uuid.UUID(OWNER_ID)

    assert can_edit(principal(Role.MEMBER), ContentModule.FORUM, Row()) is True


def test_content_permissions_to_dict():
    perms = get_content_permissions(principal(Role.MEMBER), ContentModule.FORUM, OWN_ITEM)

    assert perms.to_dict() == {
        "canCreate": True,
        "canEdit": True,
        "canDelete": True,
        "canViewDrafts": False,
    }


def test_content_permissions_without_item():
    perms = get_content_permissions(principal(Role.MEMBER), ContentModule.FORUM)

    assert perms.can_create is True
    assert perms.can_edit is False
    assert perms.can_delete is False
