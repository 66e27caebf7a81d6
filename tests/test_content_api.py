"""
tests.test_content_api

Wellness content (public reads, admin writes) and community posts/comments.
"""

from __future__ import annotations

import httpx
import pytest

from .conftest import TestUser

ARTICLE = {"title": "Cycle basics", "content": "What a typical cycle looks like.", "category": "edu"}


@pytest.mark.asyncio
async def test_only_admins_publish_content(
    client: httpx.AsyncClient, alice: TestUser, admin: TestUser
) -> None:
    r = await client.post("/api/health-wellness/articles", json=ARTICLE, headers=alice.headers)
    assert r.status_code == 403
    assert r.json() == {"message": "Admin access required"}

    r = await client.post("/api/health-wellness/articles", json=ARTICLE)
    assert r.status_code == 401

    r = await client.post("/api/health-wellness/articles", json=ARTICLE, headers=admin.headers)
    assert r.status_code == 201
    assert r.json()["isPublished"] is True

    r = await client.get("/api/health-wellness/articles")
    assert [a["title"] for a in r.json()] == ["Cycle basics"]


@pytest.mark.asyncio
async def test_drafts_are_hidden_from_everyone_but_admins(
    client: httpx.AsyncClient, alice: TestUser, admin: TestUser
) -> None:
    r = await client.post(
        "/api/health-wellness/articles",
        json={**ARTICLE, "isPublished": False},
        headers=admin.headers,
    )
    draft_id = r.json()["id"]

    r = await client.get("/api/health-wellness/articles")
    assert r.json() == []
    r = await client.get(f"/api/health-wellness/articles/{draft_id}")
    assert r.status_code == 404
    r = await client.get(f"/api/health-wellness/articles/{draft_id}", headers=alice.headers)
    assert r.status_code == 404
    r = await client.get(f"/api/health-wellness/articles/{draft_id}", headers=admin.headers)
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_tips_and_resources(client: httpx.AsyncClient, admin: TestUser) -> None:
    r = await client.post(
        "/api/health-wellness/tips", json={"content": "Stay hydrated."}, headers=admin.headers
    )
    assert r.status_code == 201
    r = await client.post(
        "/api/health-wellness/resources",
        json={"title": "Helpline", "url": "https://example.org/help"},
        headers=admin.headers,
    )
    assert r.status_code == 201

    assert [t["content"] for t in (await client.get("/api/health-wellness/tips")).json()] == [
        "Stay hydrated."
    ]
    resources = (await client.get("/api/health-wellness/resources")).json()
    assert resources[0]["url"] == "https://example.org/help"


@pytest.mark.asyncio
async def test_posts_comments_and_deletion(
    client: httpx.AsyncClient, alice: TestUser, bob: TestUser, admin: TestUser
) -> None:
    r = await client.post(
        "/api/community/posts",
        json={"title": "Hello all", "content": "First post in the community!"},
        headers=alice.headers,
    )
    assert r.status_code == 201
    post = r.json()
    assert post["userId"] == alice.id
    assert post["comments"] == []

    for who, text in ((bob, "Welcome!"), (admin, "Glad you are here.")):
        r = await client.post(
            "/api/community/comments",
            json={"postId": post["id"], "content": text},
            headers=who.headers,
        )
        assert r.status_code == 201
        assert r.json()["userId"] == who.id

    r = await client.get(f"/api/community/posts/{post['id']}")
    assert [c["content"] for c in r.json()["comments"]] == ["Welcome!", "Glad you are here."]

    r = await client.delete(f"/api/community/posts/{post['id']}", headers=bob.headers)
    assert r.status_code == 403
    r = await client.delete(f"/api/community/posts/{post['id']}", headers=alice.headers)
    assert r.status_code == 200

    r = await client.get("/api/community/posts")
    assert r.json() == []
    r = await client.delete(f"/api/community/posts/{post['id']}", headers=admin.headers)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_comment_on_missing_post(client: httpx.AsyncClient, alice: TestUser) -> None:
    r = await client.post(
        "/api/community/comments", json={"postId": "gone", "content": "?"}, headers=alice.headers
    )
    assert r.status_code == 404
    assert r.json() == {"message": "Post not found"}
