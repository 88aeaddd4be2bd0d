"""End-to-end tests for reporting and moderation endpoints."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from tests.di import build_api_test_container
from tribuna.interface.api.app import create_app

EDITOR = {"X-User-Id": str(uuid4()), "X-User-Role": "editor"}


@pytest.fixture
def client():
    return TestClient(create_app(container=build_api_test_container()))


@pytest.fixture
def reported(client):
    """A comment with one pending spam report."""
    post_id = str(uuid4())
    comment = client.post(
        f"/posts/{post_id}/comments",
        json={"content": "Buy cheap tickets here"},
        headers={"X-User-Id": str(uuid4())},
    ).json()["comment"]
    report = client.post(
        f"/comments/{comment['id']}/reports",
        json={"reason": "spam", "description": "Ticket touting"},
        headers={"X-User-Id": str(uuid4())},
    )
    assert report.status_code == 201, report.text
    return post_id, comment, report.json()["report"]


class TestReportEndpoints:
    """End-to-end tests for the moderation flow."""

    def test_unknown_reason_is_bad_request(self, client, reported):
        _, comment, _ = reported

        response = client.post(
            f"/comments/{comment['id']}/reports",
            json={"reason": "annoying"},
            headers={"X-User-Id": str(uuid4())},
        )

        assert response.status_code == 400

    def test_moderator_lists_pending_reports(self, client, reported):
        _, _, report = reported

        response = client.get("/reports", params={"status": "pending"}, headers=EDITOR)

        assert response.status_code == 200
        assert [r["id"] for r in response.json()["reports"]] == [report["id"]]

    def test_regular_user_cannot_list_reports(self, client, reported):
        response = client.get("/reports", headers={"X-User-Id": str(uuid4())})

        assert response.status_code == 403

    def test_resolve_with_delete_tombstones_comment(self, client, reported):
        # Arrange
        post_id, comment, report = reported

        # Act
        response = client.post(
            f"/reports/{report['id']}/review",
            json={"action": "resolve", "delete_comment": True},
            headers=EDITOR,
        )

        # Assert
        assert response.status_code == 200
        assert response.json()["report"]["status"] == "resolved"
        assert response.json()["deleted_comment"]["id"] == comment["id"]
        thread = client.get(f"/posts/{post_id}/comments").json()
        assert thread["comments"] == []

    def test_second_review_is_bad_request(self, client, reported):
        _, _, report = reported
        client.post(
            f"/reports/{report['id']}/review", json={"action": "dismiss"}, headers=EDITOR
        )

        response = client.post(
            f"/reports/{report['id']}/review", json={"action": "resolve"}, headers=EDITOR
        )

        assert response.status_code == 400
