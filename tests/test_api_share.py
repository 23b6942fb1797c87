"""Tests for the /api/share endpoints."""

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from meeting_actions.api.config import get_settings
from meeting_actions.api.routes.share import router
from meeting_actions.errors import EmailDeliveryError
from meeting_actions.services.email_service import DailyEmailQuota, EmailService
from meeting_actions.services.share_store import ShareStore

ACTIONS = [
    {"owner": "John", "task": "send the report"},
    {"owner": "Unassigned", "task": "book the room"},
]


def _make_app(settings, email_client=None, quota=None) -> FastAPI:
    app = FastAPI()
    app.include_router(router)
    app.state.shares = ShareStore()
    app.state.email = EmailService(email_client, quota or DailyEmailQuota(limit=100))
    app.dependency_overrides[get_settings] = lambda: settings
    return app


class TestShareLink:
    def test_create_and_fetch(self, settings):
        client = TestClient(_make_app(settings))

        created = client.post("/api/share/link", json={"actions": ACTIONS})

        assert created.status_code == 200
        data = created.json()
        assert data["success"] is True
        assert data["shareLink"] == f"http://testserver/api/share/{data['shareId']}"

        fetched = client.get(f"/api/share/{data['shareId']}")
        assert fetched.status_code == 200
        assert fetched.json()["actions"] == ACTIONS
        assert fetched.json()["createdAt"]

    @pytest.mark.parametrize("payload", [{}, {"actions": []}, {"actions": "nope"}])
    def test_actions_required(self, settings, payload):
        client = TestClient(_make_app(settings))

        response = client.post("/api/share/link", json=payload)

        assert response.status_code == 400
        assert response.json()["detail"] == "Actions are required"

    def test_malformed_action(self, settings):
        client = TestClient(_make_app(settings))

        response = client.post("/api/share/link", json={"actions": [{"owner": "John"}]})

        assert response.status_code == 400

    def test_unknown_share(self, settings):
        client = TestClient(_make_app(settings))

        response = client.get("/api/share/does-not-exist")

        assert response.status_code == 404
        assert response.json()["detail"] == "Shared link not found or expired"


class TestShareEmail:
    def test_sends_email(self, settings):
        email_client = AsyncMock()
        client = TestClient(_make_app(settings, email_client))

        response = client.post(
            "/api/share/email",
            json={
                "actions": ACTIONS,
                "recipients": ["a@example.com", "b@example.com"],
                "subject": "Weekly sync",
            },
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Email sent successfully",
            "recipients": ["a@example.com", "b@example.com"],
            "failed": [],
        }
        assert email_client.send.await_count == 2
        assert email_client.send.await_args.args[1] == "Weekly sync"

    def test_actions_required(self, settings):
        client = TestClient(_make_app(settings, AsyncMock()))

        response = client.post("/api/share/email", json={"recipients": ["a@example.com"]})

        assert response.status_code == 400
        assert response.json()["detail"] == "Actions are required"

    def test_recipients_required(self, settings):
        client = TestClient(_make_app(settings, AsyncMock()))

        response = client.post("/api/share/email", json={"actions": ACTIONS, "recipients": []})

        assert response.status_code == 400
        assert response.json()["detail"] == "At least one recipient email is required"

    def test_invalid_recipient(self, settings):
        email_client = AsyncMock()
        client = TestClient(_make_app(settings, email_client))

        response = client.post(
            "/api/share/email",
            json={"actions": ACTIONS, "recipients": ["a@example.com", "not-an-email"]},
        )

        assert response.status_code == 400
        assert "not-an-email" in response.json()["detail"]
        email_client.send.assert_not_awaited()

    def test_not_configured(self, settings):
        client = TestClient(_make_app(settings))

        response = client.post(
            "/api/share/email",
            json={"actions": ACTIONS, "recipients": ["a@example.com"]},
        )

        assert response.status_code == 503
        assert "SENDGRID_API_KEY" in response.json()["detail"]

    def test_quota_exceeded(self, settings):
        client = TestClient(_make_app(settings, AsyncMock(), DailyEmailQuota(limit=1)))

        response = client.post(
            "/api/share/email",
            json={"actions": ACTIONS, "recipients": ["a@example.com", "b@example.com"]},
        )

        assert response.status_code == 429
        assert "Only 1 emails remaining today" in response.json()["detail"]

    def test_all_deliveries_failed(self, settings):
        email_client = AsyncMock()
        email_client.send.side_effect = EmailDeliveryError("SendGrid API error: forbidden")
        client = TestClient(_make_app(settings, email_client))

        response = client.post(
            "/api/share/email",
            json={"actions": ACTIONS, "recipients": ["a@example.com"]},
        )

        assert response.status_code == 502

    def test_partial_delivery(self, settings):
        email_client = AsyncMock()
        email_client.send.side_effect = [None, EmailDeliveryError("SendGrid API error: bounced")]
        client = TestClient(_make_app(settings, email_client))

        response = client.post(
            "/api/share/email",
            json={"actions": ACTIONS, "recipients": ["a@example.com", "b@example.com"]},
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": False,
            "message": "Email sent to some recipients",
            "recipients": ["a@example.com"],
            "failed": ["b@example.com"],
        }


class TestEmailQuota:
    def test_not_configured(self, settings):
        client = TestClient(_make_app(settings))

        response = client.get("/api/share/email/quota")

        assert response.status_code == 200
        assert response.json() == {
            "available": False,
            "message": "Email service is not configured",
        }

    def test_usage(self, settings):
        quota = DailyEmailQuota(limit=100)
        quota.record(3)
        client = TestClient(_make_app(settings, AsyncMock(), quota))

        data = client.get("/api/share/email/quota").json()

        assert data["available"] is True
        assert data["limit"] == 100
        assert data["used"] == 3
        assert data["remaining"] == 97
        assert data["resetDate"] == quota.reset_date.isoformat()
