"""Content routes: status codes, permission gates and response shapes."""

from craftboard.shared.repositories.content_repository import ContentRepository
from tests.conftest import auth_headers, forum_post_body


async def create_post(client, user, **overrides):
    response = await client.post(
        "/api/forum/posts", json=forum_post_body(**overrides), headers=auth_headers(user)
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


# ═══════════════════════════════════════════════════════════════════════════════
# CREATE
# ═══════════════════════════════════════════════════════════════════════════════


async def test_member_creates_forum_post(client, users):
    response = await client.post(
        "/api/forum/posts", json=forum_post_body(), headers=auth_headers(users["alice"])
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Forum post created successfully"
    post = body["data"]
    assert post["slug"] == "hello-world"
    assert post["author"]["name"] == "alice"
    assert post["excerpt"] == "First post on the server."
    assert post["metaDescription"] == "First post on the server."
    assert post["isPinned"] is False
    assert post["stats"]["likesCount"] == 0
    assert post["permissions"]["canEdit"] is True


async def test_second_post_with_same_title_gets_suffix(client, users):
    await create_post(client, users["alice"])
    second = await create_post(client, users["bob"])

    assert second["slug"] == "hello-world-1"


async def test_anonymous_create_is_401(client, users):
    response = await client.post("/api/forum/posts", json=forum_post_body())

    assert response.status_code == 401
    assert response.json() == {
        "success": False,
        "error": "Authentication required",
        "code": "AUTHENTICATION_ERROR",
    }


async def test_anonymous_write_with_invalid_body_is_401(client, users):
    await create_post(client, users["alice"])

    created = await client.post("/api/forum/posts", json={"title": "x"})
    updated = await client.put("/api/forum/posts/hello-world", json={"title": ""})

    for response in (created, updated):
        assert response.status_code == 401
        assert response.json()["code"] == "AUTHENTICATION_ERROR"


async def test_signed_in_write_with_invalid_body_is_400(client, users):
    response = await client.post(
        "/api/forum/posts", json={"title": "x"}, headers=auth_headers(users["alice"])
    )

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


async def test_invalid_token_on_write_is_401(client, users):
    response = await client.post(
        "/api/forum/posts",
        json=forum_post_body(),
        headers={"Authorization": "Bearer not-a-token"},
    )

    assert response.status_code == 401


async def test_banned_create_is_403(client, users):
    response = await client.post(
        "/api/forum/posts", json=forum_post_body(), headers=auth_headers(users["banned"])
    )

    assert response.status_code == 403
    assert response.json()["code"] == "AUTHORIZATION_ERROR"


async def test_member_cannot_create_blog_post(client, users):
    response = await client.post(
        "/api/blog/posts",
        json={"title": "Patch notes", "content": "<p>1.2 is out</p>"},
        headers=auth_headers(users["alice"]),
    )

    assert response.status_code == 403


async def test_validation_errors_name_fields(client, users):
    response = await client.post(
        "/api/forum/posts",
        json=forum_post_body(title="hi", content="<p></p>"),
        headers=auth_headers(users["alice"]),
    )

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "VALIDATION_ERROR"
    fields = {error["field"] for error in body["details"]["errors"]}
    assert {"title", "content"} <= fields


async def test_wiki_guide_defaults(client, users):
    response = await client.post(
        "/api/wiki/guides",
        json={"title": "Getting Started", "content": "<p>Punch a tree.</p>", "category": "getting-started"},
        headers=auth_headers(users["admin"]),
    )

    assert response.status_code == 201
    guide = response.json()["data"]
    assert guide["difficulty"] == "beginner"
    assert guide["category"] == "getting-started"
    assert guide["stats"]["helpfulsCount"] == 0


async def test_wiki_rejects_unknown_category(client, users):
    response = await client.post(
        "/api/wiki/guides",
        json={"title": "Getting Started", "content": "<p>Punch a tree.</p>", "category": "lore"},
        headers=auth_headers(users["admin"]),
    )

    assert response.status_code == 400


async def test_dex_monster_round_trips_nested_fields(client, users):
    payload = {
        "name": "Zombie",
        "description": "<p>Groans at night.</p>",
        "category": "Hostile",
        "behaviors": ["hostile", "burns in daylight"],
        "drops": [{"itemName": "Rotten Flesh", "dropChance": 0.8, "minQuantity": 0, "maxQuantity": 2}],
        "spawning": {"biomes": ["plains"], "lightLevel": {"min": 0, "max": 7}, "timeOfDay": "night"},
        "combatStats": {"health": 20, "damage": 3, "speed": 0.23, "xpDrop": 5},
    }

    response = await client.post("/api/dex/monsters", json=payload, headers=auth_headers(users["admin"]))

    assert response.status_code == 201, response.text
    monster = response.json()["data"]
    assert monster["slug"] == "zombie"
    assert monster["name"] == "Zombie"
    assert monster["title"] == "Zombie"
    assert monster["description"] == "<p>Groans at night.</p>"
    assert monster["drops"][0]["itemName"] == "Rotten Flesh"
    assert monster["spawning"]["lightLevel"] == {"min": 0, "max": 7}
    assert monster["spawning"]["spawnRate"] == "common"
    assert monster["combatStats"]["xpDrop"] == 5


async def test_dex_rejects_inverted_drop_quantities(client, users):
    payload = {
        "name": "Skeleton",
        "description": "<p>Rattles.</p>",
        "category": "Hostile",
        "drops": [{"itemName": "Bone", "dropChance": 0.5, "minQuantity": 3, "maxQuantity": 1}],
    }

    response = await client.post("/api/dex/monsters", json=payload, headers=auth_headers(users["admin"]))

    assert response.status_code == 400


# ═══════════════════════════════════════════════════════════════════════════════
# READ
# ═══════════════════════════════════════════════════════════════════════════════


async def test_detail_counts_anonymous_views(client, users):
    await create_post(client, users["alice"])

    await client.get("/api/forum/posts/hello-world")
    response = await client.get("/api/forum/posts/hello-world")

    assert response.status_code == 200
    post = response.json()["data"]
    assert post["stats"]["viewsCount"] == 2
    assert post["interactions"] is None
    assert post["permissions"] == {
        "canCreate": False,
        "canEdit": False,
        "canDelete": False,
        "canViewDrafts": False,
    }


async def test_detail_counts_signed_in_view_once(client, users):
    await create_post(client, users["alice"])
    headers = auth_headers(users["bob"])

    await client.get("/api/forum/posts/hello-world", headers=headers)
    response = await client.get("/api/forum/posts/hello-world", headers=headers)

    post = response.json()["data"]
    assert post["stats"]["viewsCount"] == 1
    assert post["interactions"]["isLiked"] is False


async def test_unknown_slug_is_404(client, users):
    response = await client.get("/api/forum/posts/nope")

    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"
    assert response.json()["error"] == "Forum post 'nope' not found"


async def test_drafts_are_hidden_from_non_privileged(client, users):
    await create_post(client, users["admin"], status="draft")

    anonymous = await client.get("/api/forum/posts/hello-world")
    member = await client.get("/api/forum/posts/hello-world", headers=auth_headers(users["alice"]))
    moderator = await client.get(
        "/api/forum/posts/hello-world", headers=auth_headers(users["moderator"])
    )

    assert anonymous.status_code == 404
    assert member.status_code == 404
    assert moderator.status_code == 200
    assert moderator.json()["data"]["status"] == "draft"


async def test_author_cannot_see_own_draft(client, users):
    await create_post(client, users["alice"], status="draft")

    response = await client.get("/api/forum/posts/hello-world", headers=auth_headers(users["alice"]))

    assert response.status_code == 404


async def test_listing_status_filter_is_gated(client, users):
    await create_post(client, users["alice"], title="Published one")
    await create_post(client, users["admin"], title="Draft one", status="draft")

    member = await client.get("/api/forum/posts?status=all", headers=auth_headers(users["alice"]))
    admin = await client.get("/api/forum/posts?status=all", headers=auth_headers(users["admin"]))

    member_data = member.json()["data"]
    assert member_data["pagination"]["total"] == 1
    assert member_data["filters"]["status"] == "published"
    assert member_data["items"][0]["interactions"]["isLiked"] is False
    admin_data = admin.json()["data"]
    assert admin_data["pagination"]["total"] == 2
    assert admin_data["filters"]["status"] == "all"


async def test_listing_pagination_and_filters(client, users):
    for title in ("Creeper farm", "Iron farm", "Server rules"):
        await create_post(client, users["alice"], title=title)

    response = await client.get("/api/forum/posts?search=farm&limit=1&page=2&sortBy=oldest")

    data = response.json()["data"]
    assert [item["title"] for item in data["items"]] == ["Iron farm"]
    assert data["pagination"] == {
        "page": 2,
        "limit": 1,
        "total": 2,
        "pages": 2,
        "hasNext": False,
        "hasPrev": True,
    }
    assert data["filters"] == {"search": "farm", "status": "published", "sortBy": "oldest"}
    assert data["items"][0]["interactions"] is None


async def test_listing_rejects_bad_paging(client, users):
    response = await client.get("/api/forum/posts?limit=500")

    assert response.status_code == 400
    assert response.json()["details"]["errors"][0]["field"] == "limit"


async def test_listing_tags_filter(client, users):
    await create_post(client, users["alice"], title="Redstone clock", tags=["redstone", "guide"])
    await create_post(client, users["alice"], title="Castle build", tags=["build"])

    response = await client.get("/api/forum/posts?tags=redstone")

    assert [item["title"] for item in response.json()["data"]["items"]] == ["Redstone clock"]


async def test_categories_with_permissions(client, users):
    await create_post(client, users["alice"], title="One", category="Builds")
    await create_post(client, users["alice"], title="Two", category="Builds")
    await create_post(client, users["alice"], title="Three", category="General")

    response = await client.get("/api/forum/categories", headers=auth_headers(users["alice"]))

    data = response.json()["data"]
    assert data["categories"] == [{"name": "Builds", "count": 2}, {"name": "General", "count": 1}]
    assert data["permissions"]["canCreate"] is True
    assert data["permissions"]["canViewDrafts"] is False


async def test_invalid_token_on_read_is_anonymous(client, users):
    await create_post(client, users["alice"])

    response = await client.get(
        "/api/forum/posts/hello-world", headers={"Authorization": "Bearer garbage"}
    )

    assert response.status_code == 200
    assert response.json()["data"]["interactions"] is None


# ═══════════════════════════════════════════════════════════════════════════════
# UPDATE
# ═══════════════════════════════════════════════════════════════════════════════


async def test_author_renames_post(client, users):
    await create_post(client, users["alice"])

    response = await client.put(
        "/api/forum/posts/hello-world",
        json={"title": "Brand New Title"},
        headers=auth_headers(users["alice"]),
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["slugChanged"] is True
    assert data["newSlug"] == "brand-new-title"
    assert data["item"]["title"] == "Brand New Title"
    assert data["item"]["content"] == "<p>First post on the server.</p>"
    assert data["item"]["isPinned"] is False
    assert response.json()["message"] == "Forum post updated successfully"

    old = await client.get("/api/forum/posts/hello-world")
    assert old.status_code == 404


async def test_update_without_title_keeps_slug(client, users):
    await create_post(client, users["alice"])

    response = await client.put(
        "/api/forum/posts/hello-world",
        json={"content": "<p>Edited</p>"},
        headers=auth_headers(users["alice"]),
    )

    data = response.json()["data"]
    assert data["slugChanged"] is False
    assert data["newSlug"] == "hello-world"
    assert data["item"]["title"] == "Hello World"


async def test_refused_edit_never_reaches_storage(client, users, monkeypatch):
    await create_post(client, users["alice"])
    calls = []

    async def recording_update(self, slug, patch):
        calls.append(slug)

    monkeypatch.setattr(ContentRepository, "update_by_slug", recording_update)

    response = await client.put(
        "/api/forum/posts/hello-world",
        json={"title": "Hijacked"},
        headers=auth_headers(users["bob"]),
    )

    assert response.status_code == 403
    assert calls == []


async def test_moderator_edits_any_forum_post(client, users):
    await create_post(client, users["alice"])

    response = await client.put(
        "/api/forum/posts/hello-world",
        json={"isPinned": True, "isLocked": True},
        headers=auth_headers(users["moderator"]),
    )

    assert response.status_code == 200
    item = response.json()["data"]["item"]
    assert (item["isPinned"], item["isLocked"]) == (True, True)


async def test_member_cannot_pin_own_post(client, users):
    await create_post(client, users["alice"])

    response = await client.put(
        "/api/forum/posts/hello-world",
        json={"isPinned": True},
        headers=auth_headers(users["alice"]),
    )

    assert response.status_code == 403


async def test_moderator_cannot_edit_blog(client, users):
    created = await client.post(
        "/api/blog/posts",
        json={"title": "Patch notes", "content": "<p>1.2 is out</p>"},
        headers=auth_headers(users["admin"]),
    )
    assert created.status_code == 201

    response = await client.put(
        "/api/blog/posts/patch-notes",
        json={"title": "Patch notes 1.2"},
        headers=auth_headers(users["moderator"]),
    )

    assert response.status_code == 403


async def test_update_missing_item_is_404(client, users):
    response = await client.put(
        "/api/forum/posts/ghost",
        json={"title": "Anything"},
        headers=auth_headers(users["admin"]),
    )

    assert response.status_code == 404


async def test_admin_publishes_draft(client, users):
    await create_post(client, users["admin"], status="draft")

    response = await client.put(
        "/api/forum/posts/hello-world",
        json={"status": "published"},
        headers=auth_headers(users["admin"]),
    )

    assert response.json()["data"]["item"]["status"] == "published"
    public = await client.get("/api/forum/posts/hello-world")
    assert public.status_code == 200


# ═══════════════════════════════════════════════════════════════════════════════
# DELETE
# ═══════════════════════════════════════════════════════════════════════════════


async def test_author_deletes_post(client, users):
    await create_post(client, users["alice"])

    response = await client.delete("/api/forum/posts/hello-world", headers=auth_headers(users["alice"]))

    assert response.status_code == 200
    assert response.json()["message"] == "Forum post deleted successfully"
    assert (await client.get("/api/forum/posts/hello-world")).status_code == 404
    listing = await client.get("/api/forum/posts")
    assert listing.json()["data"]["pagination"]["total"] == 0


async def test_delete_frees_slug(client, users):
    await create_post(client, users["alice"])
    await client.delete("/api/forum/posts/hello-world", headers=auth_headers(users["alice"]))

    again = await create_post(client, users["alice"])

    assert again["slug"] == "hello-world"


async def test_delete_status_codes(client, users):
    await create_post(client, users["alice"])

    anonymous = await client.delete("/api/forum/posts/hello-world")
    other = await client.delete("/api/forum/posts/hello-world", headers=auth_headers(users["bob"]))
    missing = await client.delete("/api/forum/posts/ghost", headers=auth_headers(users["admin"]))

    assert anonymous.status_code == 401
    assert other.status_code == 403
    assert missing.status_code == 404


async def test_delete_twice_is_404(client, users):
    await create_post(client, users["alice"])
    headers = auth_headers(users["moderator"])

    first = await client.delete("/api/forum/posts/hello-world", headers=headers)
    second = await client.delete("/api/forum/posts/hello-world", headers=headers)

    assert (first.status_code, second.status_code) == (200, 404)
