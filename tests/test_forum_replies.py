"""Forum thread replies."""

import uuid

from tests.conftest import auth_headers, forum_post_body


async def create_thread(client, user, title="Hello World"):
    response = await client.post(
        "/api/forum/posts", json=forum_post_body(title=title), headers=auth_headers(user)
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]["slug"]


async def reply(client, user, slug="hello-world", content="Welcome!", **extra):
    return await client.post(
        f"/api/forum/posts/{slug}/replies",
        json={"content": content, **extra},
        headers=auth_headers(user),
    )


async def replies_count(client, slug="hello-world") -> int:
    response = await client.get(f"/api/forum/posts/{slug}")
    return response.json()["data"]["stats"]["repliesCount"]


async def test_reply_updates_thread_counters(client, users):
    await create_thread(client, users["alice"])

    response = await reply(client, users["bob"])

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Reply posted successfully"
    assert body["data"]["content"] == "Welcome!"
    assert body["data"]["author"]["name"] == "bob"
    assert body["data"]["canEdit"] is True

    thread = (await client.get("/api/forum/posts/hello-world")).json()["data"]
    assert thread["stats"]["repliesCount"] == 1
    assert thread["lastReplyAt"] is not None


async def test_list_replies_oldest_first_with_edit_flags(client, users):
    await create_thread(client, users["alice"])
    await reply(client, users["bob"], content="First")
    await reply(client, users["alice"], content="Second")

    response = await client.get(
        "/api/forum/posts/hello-world/replies", headers=auth_headers(users["bob"])
    )

    data = response.json()["data"]
    assert [item["content"] for item in data["items"]] == ["First", "Second"]
    assert [item["canEdit"] for item in data["items"]] == [True, False]
    assert data["pagination"]["total"] == 2


async def test_anonymous_and_banned_cannot_reply(client, users):
    await create_thread(client, users["alice"])

    anonymous = await client.post("/api/forum/posts/hello-world/replies", json={"content": "hi"})
    banned = await reply(client, users["banned"])

    assert anonymous.status_code == 401
    assert banned.status_code == 403


async def test_anonymous_reply_with_invalid_body_is_401(client, users):
    await create_thread(client, users["alice"])

    response = await client.post("/api/forum/posts/hello-world/replies", json={"content": ""})

    assert response.status_code == 401


async def test_reply_to_missing_thread_is_404(client, users):
    response = await reply(client, users["alice"], slug="ghost")

    assert response.status_code == 404


async def test_locked_thread_accepts_staff_replies_only(client, users):
    await create_thread(client, users["alice"])
    locked = await client.put(
        "/api/forum/posts/hello-world",
        json={"isLocked": True},
        headers=auth_headers(users["moderator"]),
    )
    assert locked.status_code == 200

    member = await reply(client, users["bob"])
    moderator = await reply(client, users["moderator"], content="Thread closed.")

    assert member.status_code == 403
    assert moderator.status_code == 201


async def test_reply_to_must_belong_to_thread(client, users):
    await create_thread(client, users["alice"])
    await create_thread(client, users["alice"], title="Other thread")
    other = (await reply(client, users["bob"], slug="other-thread")).json()["data"]

    cross = await reply(client, users["bob"], replyToId=other["id"])
    unknown = await reply(client, users["bob"], replyToId=str(uuid.uuid4()))

    assert cross.status_code == 400
    assert unknown.status_code == 400


async def test_nested_reply(client, users):
    await create_thread(client, users["alice"])
    parent = (await reply(client, users["bob"], content="Parent")).json()["data"]

    child = await reply(client, users["alice"], content="Child", replyToId=parent["id"])

    assert child.status_code == 201
    assert child.json()["data"]["replyToId"] == parent["id"]


async def test_reply_must_contain_text(client, users):
    await create_thread(client, users["alice"])

    response = await reply(client, users["bob"], content="<br/>")

    assert response.status_code == 400


async def test_edit_reply_permissions(client, users):
    await create_thread(client, users["alice"])
    created = (await reply(client, users["bob"], content="Original")).json()["data"]
    url = f"/api/forum/replies/{created['id']}"

    by_other = await client.put(url, json={"content": "Hacked"}, headers=auth_headers(users["alice"]))
    by_author = await client.put(url, json={"content": "Edited"}, headers=auth_headers(users["bob"]))
    by_staff = await client.put(url, json={"content": "Moderated"}, headers=auth_headers(users["moderator"]))

    assert by_other.status_code == 403
    assert by_author.status_code == 200
    assert by_author.json()["data"]["content"] == "Edited"
    assert by_staff.status_code == 200


async def test_delete_reply_decrements_counter(client, users):
    await create_thread(client, users["alice"])
    created = (await reply(client, users["bob"])).json()["data"]
    await reply(client, users["alice"], content="Thanks")
    assert await replies_count(client) == 2

    response = await client.delete(
        f"/api/forum/replies/{created['id']}", headers=auth_headers(users["bob"])
    )

    assert response.status_code == 200
    assert response.json()["message"] == "Reply deleted successfully"
    assert await replies_count(client) == 1
    listing = await client.get("/api/forum/posts/hello-world/replies")
    assert [item["content"] for item in listing.json()["data"]["items"]] == ["Thanks"]

    again = await client.delete(
        f"/api/forum/replies/{created['id']}", headers=auth_headers(users["bob"])
    )
    assert again.status_code == 404


async def test_unknown_reply_is_404(client, users):
    response = await client.put(
        f"/api/forum/replies/{uuid.uuid4()}",
        json={"content": "Anything"},
        headers=auth_headers(users["admin"]),
    )

    assert response.status_code == 404
