"""
HTTP tests for the adapter application: webhook handshake and notifications,
health checks and attachment serving.
"""

import pytest
from fastapi.testclient import TestClient

from wachannel.core.channel_app import create_app
from wachannel.core.config.settings import settings
from wachannel.domain.models.attachment import AttachmentCreate

WEBHOOK_PATH = settings.webhook_path


@pytest.fixture
def app(event_bus, settings_provider, attachment_service, fake_session):
    return create_app(
        event_bus=event_bus,
        settings_provider=settings_provider,
        attachment_service=attachment_service,
        session=fake_session,
    )


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


class TestVerification:
    def test_challenge_is_echoed_as_plain_text(self, client):
        response = client.get(
            WEBHOOK_PATH,
            params={
                "hub.mode": "subscribe",
                "hub.verify_token": "test_verify_token",
                "hub.challenge": "1158201444",
            },
        )

        assert response.status_code == 200
        assert response.text == "1158201444"
        assert response.headers["content-type"].startswith("text/plain")

    def test_wrong_token(self, client):
        response = client.get(
            WEBHOOK_PATH,
            params={
                "hub.mode": "subscribe",
                "hub.verify_token": "wrong",
                "hub.challenge": "1158201444",
            },
        )

        assert response.status_code == 500
        assert "err" in response.json()

    def test_missing_parameters(self, client):
        response = client.get(WEBHOOK_PATH)

        assert response.status_code == 500


class TestNotifications:
    def test_signed_notification(
        self, client, signed, notification, message, captured_events
    ):
        body, signature = signed(notification(messages=[message("text", {"body": "hi"})]))

        response = client.post(
            WEBHOOK_PATH, content=body, headers={"X-Hub-Signature": signature}
        )

        assert response.status_code == 200
        assert response.json() == {"success": True}
        [(name, event)] = captured_events
        assert name == "hook:chatbot:message"
        assert event.get_message().text == "hi"

    def test_bad_signature(self, client, notification, captured_events):
        response = client.post(
            WEBHOOK_PATH,
            content=b'{"object": "whatsapp_business_account", "entry": []}',
            headers={"X-Hub-Signature": "sha1=0000"},
        )

        assert response.status_code == 500
        assert response.json() == {"err": "Couldn't match the request signature."}
        assert captured_events == []

    def test_not_a_whatsapp_notification(self, client, signed):
        body, signature = signed({"object": "page", "entry": []})

        response = client.post(
            WEBHOOK_PATH, content=body, headers={"X-Hub-Signature": signature}
        )

        assert response.status_code == 400
        assert response.json() == {
            "err": "The whatsapp_business_account parameter is missing!"
        }

    def test_status_notification(self, client, signed, notification, status, captured_events):
        body, signature = signed(notification(statuses=[status("read")]))

        response = client.post(
            WEBHOOK_PATH, content=body, headers={"X-Hub-Signature": signature}
        )

        assert response.status_code == 200
        assert [name for name, _ in captured_events] == ["hook:chatbot:read"]


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_detailed_reports_flags_only(self, client):
        response = client.get("/health/detailed")

        channel = response.json()["channel"]
        assert channel == {
            "app_secret_configured": True,
            "access_token_configured": True,
            "verify_token_configured": True,
        }
        assert "test_app_secret" not in response.text


class TestAttachments:
    @pytest.mark.asyncio
    async def test_serves_stored_content(self, app, attachment_service):
        stored = await attachment_service.store(
            b"\x89PNG", AttachmentCreate(name="logo.png", type="image/png", size=4)
        )

        with TestClient(app) as client:
            response = client.get(f"/attachments/{stored.id}")

        assert response.status_code == 200
        assert response.content == b"\x89PNG"
        assert response.headers["content-type"] == "image/png"
        assert 'filename="logo.png"' in response.headers["content-disposition"]

    def test_unknown_attachment(self, client):
        assert client.get("/attachments/missing").status_code == 404


def test_routes_wait_for_startup(app):
    # no lifespan: the handler is not on app.state yet
    response = TestClient(app).get("/health/detailed")

    assert response.status_code == 503


def test_shared_session_is_not_closed(app, fake_session):
    with TestClient(app):
        pass

    assert fake_session.closed is False
