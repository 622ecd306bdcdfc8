"""Integration tests for Posts API."""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from infrastructure.auth.provider import TokenUser


async def _create_post(client: AsyncClient, content: str) -> dict:
    response = await client.post("/api/v1/posts", json={"content": content})
    assert response.status_code == 201
    return response.json()["data"]


class TestCreatePost:
    @pytest.mark.asyncio
    async def test_create_post(self, authenticated_client: AsyncClient, test_user: TokenUser):
        response = await authenticated_client.post(
            "/api/v1/posts", json={"content": "  Hello ConnectHub  "}
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["content"] == "Hello ConnectHub"
        assert data["user_id"] == str(test_user.id)
        assert data["author"]["name"] == "Alice"
        assert data["like_count"] == 0
        assert data["comment_count"] == 0
        assert data["liked_by_me"] is False

    @pytest.mark.asyncio
    async def test_first_post_creates_profile(
        self, authenticated_client: AsyncClient, test_user: TokenUser
    ):
        await _create_post(authenticated_client, "First!")

        response = await authenticated_client.get(f"/api/v1/profiles/{test_user.id}")

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_empty_content_is_rejected(self, authenticated_client: AsyncClient):
        response = await authenticated_client.post("/api/v1/posts", json={"content": ""})

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_whitespace_content_is_rejected(self, authenticated_client: AsyncClient):
        response = await authenticated_client.post("/api/v1/posts", json={"content": "   "})

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"
        assert response.json()["details"] == {"field": "content"}

    @pytest.mark.asyncio
    async def test_requires_authentication(self, client: AsyncClient):
        response = await client.post("/api/v1/posts", json={"content": "Hello"})

        assert response.status_code == 401


class TestFeed:
    @pytest.mark.asyncio
    async def test_empty_feed(self, authenticated_client: AsyncClient):
        response = await authenticated_client.get("/api/v1/posts")

        assert response.status_code == 200
        body = response.json()
        assert body["data"] == []
        assert body["meta"] == {"limit": 20, "next_cursor": None}

    @pytest.mark.asyncio
    async def test_feed_is_newest_first_across_authors(
        self, authenticated_client: AsyncClient, other_client: AsyncClient
    ):
        await _create_post(authenticated_client, "one")
        await _create_post(other_client, "two")
        await _create_post(authenticated_client, "three")

        response = await other_client.get("/api/v1/posts")

        assert [p["content"] for p in response.json()["data"]] == ["three", "two", "one"]

    @pytest.mark.asyncio
    async def test_cursor_pagination_covers_feed_once(self, authenticated_client: AsyncClient):
        created = [await _create_post(authenticated_client, f"post {i}") for i in range(5)]

        seen: list[str] = []
        cursor = None
        pages = 0
        while True:
            params = {"limit": 2}
            if cursor:
                params["cursor"] = cursor
            body = (await authenticated_client.get("/api/v1/posts", params=params)).json()
            seen.extend(p["id"] for p in body["data"])
            pages += 1
            cursor = body["meta"]["next_cursor"]
            if cursor is None:
                break

        assert pages == 3
        assert seen == [p["id"] for p in reversed(created)]

    @pytest.mark.asyncio
    async def test_unknown_cursor_is_rejected(self, authenticated_client: AsyncClient):
        response = await authenticated_client.get("/api/v1/posts", params={"cursor": str(uuid4())})

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_CURSOR"

    @pytest.mark.asyncio
    async def test_limit_is_bounded(self, authenticated_client: AsyncClient):
        response = await authenticated_client.get("/api/v1/posts", params={"limit": 0})

        assert response.status_code == 422


class TestSinglePost:
    @pytest.mark.asyncio
    async def test_get_post(self, authenticated_client: AsyncClient):
        post = await _create_post(authenticated_client, "Hello")

        response = await authenticated_client.get(f"/api/v1/posts/{post['id']}")

        assert response.status_code == 200
        assert response.json()["data"]["content"] == "Hello"

    @pytest.mark.asyncio
    async def test_get_unknown_post(self, authenticated_client: AsyncClient):
        response = await authenticated_client.get(f"/api/v1/posts/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["error_code"] == "POST_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_author_can_edit(self, authenticated_client: AsyncClient):
        post = await _create_post(authenticated_client, "Typo")

        response = await authenticated_client.patch(
            f"/api/v1/posts/{post['id']}", json={"content": "Fixed"}
        )

        assert response.status_code == 200
        assert response.json()["data"]["content"] == "Fixed"

    @pytest.mark.asyncio
    async def test_others_cannot_edit(
        self, authenticated_client: AsyncClient, other_client: AsyncClient
    ):
        post = await _create_post(authenticated_client, "Original")

        response = await other_client.patch(
            f"/api/v1/posts/{post['id']}", json={"content": "Vandalized"}
        )

        assert response.status_code == 403
        assert response.json()["error_code"] == "FORBIDDEN"
        fetched = await authenticated_client.get(f"/api/v1/posts/{post['id']}")
        assert fetched.json()["data"]["content"] == "Original"

    @pytest.mark.asyncio
    async def test_others_cannot_resubmit_current_content(
        self, authenticated_client: AsyncClient, other_client: AsyncClient
    ):
        post = await _create_post(authenticated_client, "Original")

        response = await other_client.patch(
            f"/api/v1/posts/{post['id']}", json={"content": "Original"}
        )

        assert response.status_code == 403
        assert response.json()["error_code"] == "FORBIDDEN"

    @pytest.mark.asyncio
    async def test_others_cannot_delete(
        self, authenticated_client: AsyncClient, other_client: AsyncClient
    ):
        post = await _create_post(authenticated_client, "Keep me")

        response = await other_client.delete(f"/api/v1/posts/{post['id']}")

        assert response.status_code == 403
        assert (await authenticated_client.get(f"/api/v1/posts/{post['id']}")).status_code == 200

    @pytest.mark.asyncio
    async def test_author_can_delete(self, authenticated_client: AsyncClient):
        post = await _create_post(authenticated_client, "Delete me")

        response = await authenticated_client.delete(f"/api/v1/posts/{post['id']}")

        assert response.status_code == 204
        assert (await authenticated_client.get(f"/api/v1/posts/{post['id']}")).status_code == 404
