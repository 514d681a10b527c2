"""Tests for the HTTP surface using FastAPI's TestClient."""

from unittest.mock import AsyncMock, MagicMock, patch
from urllib.parse import parse_qs, urlsplit
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from conftest import NOW, FakeExecutor, rows, total
from matcha.api import deps
from matcha.db.repositories import UserRepository
from matcha.main import create_app
from matcha.services import ChatService, HashtagService


@pytest.fixture
def fake_executor():
    return FakeExecutor()


@pytest.fixture
def app(fake_executor):
    application = create_app()
    application.dependency_overrides[deps.get_user_repository] = lambda: UserRepository(fake_executor)
    application.dependency_overrides[deps.get_hashtag_service] = lambda: HashtagService(fake_executor)
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


class TestHealth:
    """Tests for health endpoints."""

    def test_healthz(self, client):
        assert client.get("/healthz").json() == {"status": "ok", "service": "matcha"}

    def test_livez(self, client):
        assert client.get("/livez").json() == {"status": "alive"}

    def test_readyz_without_database(self, client):
        with patch("matcha.api.health.check_health", AsyncMock(return_value=False)):
            response = client.get("/readyz")

        assert response.status_code == 503
        assert response.json()["status"] == "not ready"

    def test_readyz_with_database(self, client):
        with patch("matcha.api.health.check_health", AsyncMock(return_value=True)):
            response = client.get("/readyz")

        assert response.status_code == 200


class TestUsers:
    """Tests for the user listing."""

    def test_list_users_paginates(self, client, fake_executor):
        fake_executor.queue(total(0))

        response = client.get("/api/users", params={"limit": 5, "order": "ASC"})

        assert response.status_code == 200
        body = response.json()
        assert body["data"] == []
        assert body["meta"]["per_page"] == 5
        assert body["meta"]["total_pages"] == 0
        assert body["links"]["self"] == "http://testserver/api/users?limit=5&order=asc&page=1"
        assert fake_executor.calls[1][1] == [5, 0]

    def test_oversized_limit_is_clamped(self, client, fake_executor):
        fake_executor.queue(total(0))

        response = client.get("/api/users", params={"limit": 1000})

        assert response.json()["meta"]["per_page"] == 100

    def test_unknown_sort_field_is_rejected(self, client, fake_executor):
        response = client.get("/api/users", params={"sort": "password_reset_token; --"})

        assert response.status_code == 400
        assert response.json()["code"] == "InvalidIdentifierError"
        assert fake_executor.calls == []

    def test_public_base_url_rewrites_links(self, client, fake_executor):
        fake_executor.queue(total(0))

        with patch.object(deps.settings, "public_base_url", "https://matcha.example/"):
            response = client.get("/api/users")

        assert response.json()["links"]["first"] == "https://matcha.example/api/users?page=1"


class TestHashtags:
    """Tests for hashtag endpoints."""

    def test_search(self, client, fake_executor):
        tag_id = uuid4()
        fake_executor.queue(total(1), rows({"id": tag_id, "name": "travel", "created_at": NOW}))

        response = client.get("/api/hashtags/search", params={"keyword": "tra"})

        assert response.status_code == 200
        assert response.json()["data"][0]["id"] == str(tag_id)
        assert fake_executor.calls[0][1] == ["%tra%"]

    def test_search_links_keep_keyword(self, client, fake_executor):
        fake_executor.queue(total(25), rows())

        response = client.get("/api/hashtags/search", params={"keyword": "tra"})

        links = response.json()["links"]
        assert links["next"] == "http://testserver/api/hashtags/search?keyword=tra&page=2"
        for name in ("first", "last", "self", "next"):
            assert parse_qs(urlsplit(links[name]).query)["keyword"] == ["tra"]
            assert "name" not in parse_qs(urlsplit(links[name]).query)

    def test_following_next_link_keeps_filtering(self, client, fake_executor):
        fake_executor.queue(total(25), rows(), total(25), rows())

        first_page = client.get("/api/hashtags/search", params={"keyword": "tra"})
        client.get(first_page.json()["links"]["next"])

        count_sql, count_params = fake_executor.calls[2]
        assert count_sql == "SELECT COUNT(*) AS total FROM hashtags WHERE name ILIKE $1"
        assert count_params == ["%tra%"]
        assert fake_executor.calls[3][1] == ["%tra%", 10, 10]

    def test_user_hashtags(self, client, fake_executor):
        fake_executor.queue(rows({"id": uuid4(), "name": "music", "created_at": NOW}))

        response = client.get(f"/api/users/{uuid4()}/hashtags")

        assert response.json()["data"][0]["name"] == "music"

    def test_add_hashtag(self, client, fake_executor):
        user_id, hashtag_id = uuid4(), uuid4()
        fake_executor.queue(rows({"user_id": user_id, "hashtag_id": hashtag_id, "created_at": NOW}))

        response = client.post(f"/api/users/{user_id}/hashtags/{hashtag_id}")

        assert response.status_code == 201
        assert response.json()["data"]["hashtag_id"] == str(hashtag_id)

    def test_remove_missing_hashtag(self, client, fake_executor):
        response = client.delete(f"/api/users/{uuid4()}/hashtags/{uuid4()}")

        assert response.status_code == 404

    def test_invalid_user_id(self, client):
        assert client.get("/api/users/not-a-uuid/hashtags").status_code == 422


class TestChatMessages:
    """Tests for the chat message listing."""

    @pytest.fixture
    def chat(self, app):
        service = MagicMock(spec=ChatService)
        app.dependency_overrides[deps.get_chat_service] = lambda: service
        return service

    def test_requires_caller_header(self, client, chat):
        response = client.get(f"/api/chat/rooms/{uuid4()}/messages")

        assert response.status_code == 422

    def test_non_participant_forbidden(self, client, chat):
        chat.get_chat_messages = AsyncMock(side_effect=PermissionError("Access denied"))

        response = client.get(f"/api/chat/rooms/{uuid4()}/messages", headers={"X-User-Id": str(uuid4())})

        assert response.status_code == 403

    def test_missing_room(self, client, chat):
        chat.get_chat_messages = AsyncMock(return_value=None)

        response = client.get(f"/api/chat/rooms/{uuid4()}/messages", headers={"X-User-Id": str(uuid4())})

        assert response.status_code == 404
