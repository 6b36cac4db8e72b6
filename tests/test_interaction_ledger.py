"""
Interaction ledger: toggles keep ledger rows and counters in step, views
count once per signed-in user.
"""

import pytest
from sqlalchemy import func, select

from craftboard.shared.core.exceptions import (
    AuthenticationError,
    ContentNotFoundError,
    ValidationError,
)
from craftboard.shared.models import (
    ContentModule,
    ContentStatus,
    InteractionAction,
    InteractionResult,
    UserInteraction,
)
from craftboard.shared.repositories.content_repository import get_content_repository
from craftboard.shared.services.interaction_service import InteractionService
from tests.conftest import principal_of


async def make_item(db, author, module=ContentModule.FORUM, title="Hello World", **extra):
    values = {"title": title, "body": "<p>Body</p>", "category": "General", "tags": []}
    values.update(extra)
    return await get_content_repository(module, db).create_item(values, principal_of(author))


async def ledger_rows(db) -> int:
    return (await db.execute(select(func.count()).select_from(UserInteraction))).scalar()


async def test_like_then_unlike_restores_counter(db, users):
    item = await make_item(db, users["admin"])
    service = InteractionService(db)
    alice = principal_of(users["alice"])

    result, refreshed, state = await service.record_interaction(
        alice, ContentModule.FORUM, "hello-world", InteractionAction.LIKE
    )
    assert result == InteractionResult.ADDED
    assert refreshed.likes_count == 1
    assert state.is_liked is True

    result, refreshed, state = await service.record_interaction(
        alice, ContentModule.FORUM, "hello-world", InteractionAction.LIKE
    )
    assert result == InteractionResult.REMOVED
    assert refreshed.likes_count == 0
    assert state.is_liked is False
    assert await ledger_rows(db) == 0
    assert refreshed.id == item.id


async def test_counters_are_independent_per_action_and_user(db, users):
    await make_item(db, users["admin"])
    service = InteractionService(db)

    for name in ("alice", "bob"):
        await service.record_interaction(
            principal_of(users[name]), ContentModule.FORUM, "hello-world", InteractionAction.LIKE
        )
    _, item, state = await service.record_interaction(
        principal_of(users["alice"]), ContentModule.FORUM, "hello-world", InteractionAction.BOOKMARK
    )

    assert item.likes_count == 2
    assert item.bookmarks_count == 1
    assert item.shares_count == 0
    assert (state.is_liked, state.is_bookmarked, state.is_shared) == (True, True, False)


async def test_counter_never_goes_negative(db, users):
    item = await make_item(db, users["admin"])
    service = InteractionService(db)
    alice = principal_of(users["alice"])
    await service.record_interaction(alice, ContentModule.FORUM, "hello-world", InteractionAction.SHARE)

    # Drift the counter below the ledger, then remove the only row
    await get_content_repository(ContentModule.FORUM, db).adjust_counter(item.id, "shares_count", -5)
    _, refreshed, _ = await service.record_interaction(
        alice, ContentModule.FORUM, "hello-world", InteractionAction.SHARE
    )

    assert refreshed.shares_count == 0


async def test_add_without_new_row_leaves_counter(db, users):
    item = await make_item(db, users["admin"])
    service = InteractionService(db)
    alice = users["alice"]

    inserted = await service.repo.add(alice.id, ContentModule.FORUM, item.id, InteractionAction.LIKE)
    duplicate = await service.repo.add(alice.id, ContentModule.FORUM, item.id, InteractionAction.LIKE)

    assert (inserted, duplicate) == (True, False)
    assert await ledger_rows(db) == 1


async def test_helpful_only_on_wiki(db, users):
    await make_item(db, users["admin"])
    await make_item(db, users["admin"], ContentModule.WIKI, title="Getting Started", category="getting-started")
    service = InteractionService(db)
    alice = principal_of(users["alice"])

    with pytest.raises(ValidationError):
        await service.record_interaction(alice, ContentModule.FORUM, "hello-world", InteractionAction.HELPFUL)

    _, guide, state = await service.record_interaction(
        alice, ContentModule.WIKI, "getting-started", InteractionAction.HELPFUL
    )
    assert guide.helpfuls_count == 1
    assert state.is_helpful is True


async def test_view_is_not_a_toggle(db, users):
    await make_item(db, users["admin"])

    with pytest.raises(ValidationError):
        await InteractionService(db).record_interaction(
            principal_of(users["alice"]), ContentModule.FORUM, "hello-world", InteractionAction.VIEW
        )


async def test_anonymous_cannot_toggle(db, users):
    await make_item(db, users["admin"])

    with pytest.raises(AuthenticationError):
        await InteractionService(db).record_interaction(
            None, ContentModule.FORUM, "hello-world", InteractionAction.LIKE
        )


async def test_hidden_draft_cannot_be_toggled(db, users):
    await make_item(db, users["admin"], status=ContentStatus.DRAFT)

    with pytest.raises(ContentNotFoundError):
        await InteractionService(db).record_interaction(
            principal_of(users["alice"]), ContentModule.FORUM, "hello-world", InteractionAction.LIKE
        )


async def test_deleted_item_cannot_be_toggled(db, users):
    await make_item(db, users["admin"])
    await get_content_repository(ContentModule.FORUM, db).soft_delete_by_slug("hello-world")

    with pytest.raises(ContentNotFoundError):
        await InteractionService(db).record_interaction(
            principal_of(users["alice"]), ContentModule.FORUM, "hello-world", InteractionAction.LIKE
        )


async def test_signed_in_views_count_once(db, users):
    item = await make_item(db, users["admin"])
    service = InteractionService(db)
    alice = users["alice"]

    counted = [await service.record_view(alice.id, ContentModule.FORUM, item) for _ in range(3)]

    assert counted == [True, False, False]
    fresh = await get_content_repository(ContentModule.FORUM, db).get_fresh(item.id)
    assert fresh.views_count == 1


async def test_anonymous_views_always_count(db, users):
    item = await make_item(db, users["admin"])
    service = InteractionService(db)

    for _ in range(4):
        assert await service.record_view(None, ContentModule.FORUM, item) is True

    fresh = await get_content_repository(ContentModule.FORUM, db).get_fresh(item.id)
    assert fresh.views_count == 4


async def test_views_do_not_show_up_as_toggles(db, users):
    item = await make_item(db, users["admin"])
    service = InteractionService(db)
    alice = principal_of(users["alice"])
    await service.record_view(users["alice"].id, ContentModule.FORUM, item)

    state = await service.get_state(alice, ContentModule.FORUM, "hello-world")

    assert state.model_dump() == {
        "is_liked": False,
        "is_bookmarked": False,
        "is_shared": False,
        "is_helpful": False,
    }


async def test_states_for_items(db, users):
    first = await make_item(db, users["admin"], title="First post")
    second = await make_item(db, users["admin"], title="Second post")
    service = InteractionService(db)
    alice = principal_of(users["alice"])
    await service.record_interaction(alice, ContentModule.FORUM, "first-post", InteractionAction.LIKE)

    states = await service.states_for_items(alice, ContentModule.FORUM, [first.id, second.id])

    assert states[first.id].is_liked is True
    assert states[second.id].is_liked is False
    assert await service.states_for_items(None, ContentModule.FORUM, [first.id]) == {}
