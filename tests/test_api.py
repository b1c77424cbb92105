"""Tests for the HTTP layer."""

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt

from clipgraph.app import app
from clipgraph.api.deps import get_db_session
from clipgraph.config.settings import settings

API = settings.API_V1_PREFIX


def auth(user_id: str) -> dict:
    token = jwt.encode({"sub": user_id}, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def client(session):
    async def override_db_session():
        yield session

    app.dependency_overrides[get_db_session] = override_db_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["services"]["database"] == "disabled"


async def test_like_and_unlike(client, factory):
    owner = await factory.user()
    viewer = await factory.user()
    video = await factory.video(owner)

    liked = await client.post(f"{API}/videos/{video.id}/like", headers=auth(viewer.id))
    unliked = await client.delete(f"{API}/videos/{video.id}/like", headers=auth(viewer.id))

    assert liked.status_code == 200
    assert liked.json()["data"] == {"video_id": video.id, "liked": True, "likes_count": 1}
    assert unliked.json()["data"]["likes_count"] == 0


async def test_like_requires_token(client, factory):
    owner = await factory.user()
    video = await factory.video(owner)

    response = await client.post(f"{API}/videos/{video.id}/like")

    assert response.status_code in (401, 403)


async def test_invalid_token(client, factory):
    owner = await factory.user()
    video = await factory.video(owner)

    response = await client.post(
        f"{API}/videos/{video.id}/like", headers={"Authorization": "Bearer not-a-jwt"}
    )

    assert response.status_code == 401


async def test_self_follow_is_bad_request(client, factory):
    user = await factory.user()

    response = await client.post(f"{API}/users/{user.id}/follow", headers=auth(user.id))

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "SELF_FOLLOW"


async def test_missing_video_is_not_found(client):
    response = await client.get(f"{API}/videos/video_missing")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "VIDEO_NOT_FOUND"


async def test_create_video_and_feed(client, factory):
    owner = await factory.user()

    created = await client.post(
        f"{API}/videos", json={"caption": "first #clip"}, headers=auth(owner.id)
    )
    video_id = created.json()["data"]["id"]
    feed = await client.get(f"{API}/feed/hashtag", params={"hashtag": "clip"})

    assert created.status_code == 200
    assert feed.status_code == 200
    body = feed.json()["data"]
    assert body["feed_type"] == "HASHTAG"
    assert [item["id"] for item in body["content"]] == [video_id]
    assert body["last"] is True


async def test_following_feed_needs_login(client):
    response = await client.get(f"{API}/feed/following")

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VIEWER_REQUIRED"


async def test_unknown_feed_type(client):
    response = await client.get(f"{API}/feed/nonsense")

    assert response.status_code == 400


async def test_comment_flow(client, factory):
    owner = await factory.user()
    other = await factory.user()
    video = await factory.video(owner)

    root = await client.post(
        f"{API}/videos/{video.id}/comments", json={"content": "first"}, headers=auth(other.id)
    )
    root_id = root.json()["data"]["id"]
    reply = await client.post(
        f"{API}/videos/{video.id}/comments",
        json={"content": "reply", "parent_id": root_id},
        headers=auth(owner.id),
    )
    listing = await client.get(f"{API}/videos/{video.id}/comments")

    assert reply.json()["data"]["path"] == f"{root_id}."
    thread = listing.json()["data"]["content"][0]
    assert thread["id"] == root_id
    assert [r["content"] for r in thread["replies"]] == ["reply"]

    forbidden = await client.delete(f"{API}/comments/{root_id}", headers=auth(owner.id))
    deleted = await client.delete(f"{API}/comments/{root_id}", headers=auth(other.id))
    count = await client.get(f"{API}/videos/{video.id}/comments/count")

    assert forbidden.status_code == 403
    assert deleted.json()["data"]["comments_count"] == 1
    assert count.json()["data"]["count"] == 1


async def test_only_author_deletes_video(client, factory):
    owner = await factory.user()
    other = await factory.user()
    video = await factory.video(owner)

    forbidden = await client.delete(f"{API}/videos/{video.id}", headers=auth(other.id))
    deleted = await client.delete(f"{API}/videos/{video.id}", headers=auth(owner.id))

    assert forbidden.status_code == 403
    assert deleted.json()["data"]["deleted"] is True


async def test_suggested_users(client, factory):
    viewer = await factory.user()
    popular = await factory.user()
    fan = await factory.user()
    await client.post(f"{API}/users/{popular.id}/follow", headers=auth(fan.id))

    response = await client.get(f"{API}/users/suggested", headers=auth(viewer.id))

    content = response.json()["data"]["content"]
    assert content[0]["id"] == popular.id
    assert viewer.id not in [u["id"] for u in content]


async def test_save_counts(client, factory):
    owner = await factory.user()
    video = await factory.video(owner)

    await client.post(f"{API}/videos/{video.id}/save")
    response = await client.post(f"{API}/videos/{video.id}/save")
    missing = await client.post(f"{API}/videos/video_missing/save")

    assert response.json()["data"] == {"video_id": video.id, "saves_count": 2}
    assert missing.status_code == 404


async def test_search_users(client, factory):
    match = await factory.user(username="skater_kid")
    await factory.user(username="painter")

    response = await client.get(f"{API}/users/search", params={"q": "SKATE"})
    empty = await client.get(f"{API}/users/search", params={"q": " "})

    assert response.status_code == 200
    assert [u["id"] for u in response.json()["data"]["content"]] == [match.id]
    assert empty.status_code == 400


async def test_user_videos_respect_viewer(client, factory):
    owner = await factory.user()
    public = await factory.video(owner)
    private = await factory.video(owner, is_private=True)

    anonymous = await client.get(f"{API}/users/{owner.id}/videos")
    own = await client.get(f"{API}/users/{owner.id}/videos", headers=auth(owner.id))

    assert [v["id"] for v in anonymous.json()["data"]["content"]] == [public.id]
    assert {v["id"] for v in own.json()["data"]["content"]} == {public.id, private.id}


async def test_liked_videos_and_likers(client, factory):
    owner = await factory.user()
    fan = await factory.user()
    video = await factory.video(owner)
    await client.post(f"{API}/videos/{video.id}/like", headers=auth(fan.id))

    liked = await client.get(f"{API}/users/{fan.id}/likes")
    likers = await client.get(f"{API}/videos/{video.id}/likers")

    assert [v["id"] for v in liked.json()["data"]["content"]] == [video.id]
    assert [u["id"] for u in likers.json()["data"]["content"]] == [fan.id]


async def test_user_comments(client, factory):
    owner = await factory.user()
    video = await factory.video(owner)
    await client.post(
        f"{API}/videos/{video.id}/comments", json={"content": "nice"}, headers=auth(owner.id)
    )

    response = await client.get(f"{API}/users/{owner.id}/comments")
    missing = await client.get(f"{API}/users/user_missing/comments")

    data = response.json()["data"]
    assert [c["content"] for c in data["content"]] == ["nice"]
    assert data["total_elements"] == 1
    assert missing.status_code == 404
