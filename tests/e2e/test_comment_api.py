"""End-to-end tests for the comment, like and health endpoints."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from tests.di import build_api_test_container
from tribuna.interface.api.app import create_app


@pytest.fixture
def client():
    """Create test client with in-memory repositories shared across requests."""
    return TestClient(create_app(container=build_api_test_container()))


def _as(user_id: str, role: str | None = None) -> dict[str, str]:
    headers = {"X-User-Id": user_id}
    if role:
        headers["X-User-Role"] = role
    return headers


def _post_comment(client, post_id, user_id, content, parent_id=None):
    response = client.post(
        f"/posts/{post_id}/comments",
        json={"content": content, "parent_comment_id": parent_id},
        headers=_as(user_id),
    )
    assert response.status_code == 201, response.text
    return response.json()["comment"]


class TestHealthEndpoint:
    def test_health_reports_ok(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestThreadEndpoints:
    """End-to-end tests for reading and writing comments."""

    def test_empty_thread(self, client):
        # Act
        response = client.get(f"/posts/{uuid4()}/comments")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["comments"] == []
        assert data["total"] == 0
        assert data["sort"] == "popular"

    def test_comment_and_reply_appear_nested(self, client):
        # Arrange
        post_id = str(uuid4())
        user_id = str(uuid4())
        root = _post_comment(client, post_id, user_id, "Kick-off at eight")
        reply = _post_comment(client, post_id, user_id, "Thanks!", parent_id=root["id"])

        # Act
        response = client.get(f"/posts/{post_id}/comments", params={"sort": "recent"})

        # Assert
        data = response.json()
        assert data["total"] == 2
        assert [c["comment_id"] for c in data["comments"]] == [root["id"]]
        nested = data["comments"][0]["replies"]
        assert [c["comment_id"] for c in nested] == [reply["id"]]
        assert nested[0]["display_depth"] == 1

    def test_anonymous_post_is_unauthorized(self, client):
        response = client.post(
            f"/posts/{uuid4()}/comments", json={"content": "Hello"}
        )

        assert response.status_code == 401
        assert response.json()["detail"]["kind"] == "auth"

    def test_blank_content_is_bad_request(self, client):
        response = client.post(
            f"/posts/{uuid4()}/comments",
            json={"content": "   "},
            headers=_as(str(uuid4())),
        )

        assert response.status_code == 400
        assert response.json()["detail"]["kind"] == "validation"

    def test_reply_to_unknown_parent_is_not_found(self, client):
        response = client.post(
            f"/posts/{uuid4()}/comments",
            json={"content": "Hi", "parent_comment_id": str(uuid4())},
            headers=_as(str(uuid4())),
        )

        assert response.status_code == 404

    def test_edit_by_other_user_is_forbidden(self, client):
        # Arrange
        post_id = str(uuid4())
        comment = _post_comment(client, post_id, str(uuid4()), "Mine")

        # Act
        response = client.patch(
            f"/comments/{comment['id']}",
            json={"content": "Not yours"},
            headers=_as(str(uuid4())),
        )

        # Assert
        assert response.status_code == 403
        thread = client.get(f"/posts/{post_id}/comments").json()
        assert thread["comments"][0]["content"] == "Mine"

    def test_author_edit_and_delete(self, client):
        # Arrange
        post_id = str(uuid4())
        author = str(uuid4())
        comment = _post_comment(client, post_id, author, "Draft")

        # Act
        edited = client.patch(
            f"/comments/{comment['id']}",
            json={"content": "Final"},
            headers=_as(author),
        )
        deleted = client.delete(f"/comments/{comment['id']}", headers=_as(author))

        # Assert
        assert edited.status_code == 200
        assert edited.json()["comment"]["content"] == "Final"
        assert deleted.status_code == 200
        assert deleted.json()["comment"]["deleted_at"] is not None
        thread = client.get(f"/posts/{post_id}/comments").json()
        assert thread["comments"] == []

    def test_invalid_user_header_is_bad_request(self, client):
        response = client.get(
            f"/posts/{uuid4()}/comments", headers={"X-User-Id": "not-a-uuid"}
        )

        assert response.status_code == 400


class TestLikeEndpoint:
    """End-to-end tests for toggling likes."""

    def test_toggle_twice_restores_state(self, client):
        # Arrange
        post_id = str(uuid4())
        user_id = str(uuid4())
        comment = _post_comment(client, post_id, str(uuid4()), "Like me")

        # Act
        first = client.post(f"/comments/{comment['id']}/like", headers=_as(user_id))
        thread = client.get(f"/posts/{post_id}/comments", headers=_as(user_id)).json()
        second = client.post(f"/comments/{comment['id']}/like", headers=_as(user_id))

        # Assert
        assert first.json()["likes_count"] == 1
        assert first.json()["user_has_liked"] is True
        assert thread["comments"][0]["user_has_liked"] is True
        assert second.json()["likes_count"] == 0
        assert second.json()["user_has_liked"] is False

    def test_anonymous_like_is_unauthorized(self, client):
        comment = _post_comment(client, str(uuid4()), str(uuid4()), "Like me")

        response = client.post(f"/comments/{comment['id']}/like")

        assert response.status_code == 401
