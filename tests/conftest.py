"""
Pytest configuration and common fixtures for wachannel tests.

Provides a fake aiohttp session, the adapter's collaborators and builders for
WhatsApp notification payloads.
"""

import hashlib
import hmac
import json
from collections.abc import Callable
from typing import Any

import pytest
import pytest_asyncio

from wachannel.core.channel_handler import WhatsAppChannelHandler
from wachannel.core.config.channel_settings import EnvSettingsProvider
from wachannel.core.events.event_dispatcher import ChannelEventDispatcher
from wachannel.core.logging.context import clear_request_context
from wachannel.persistence.memory import InMemoryAttachmentService

APP_SECRET = "test_app_secret"
ACCESS_TOKEN = "test_access_token"
VERIFY_TOKEN = "test_verify_token"
PHONE_NUMBER_ID = "106540352242922"
WA_ID = "5511999990000"
GRAPH_URL = "https://graph.example.com"
API_VERSION = "v20.0"
PUBLIC_URL = "https://files.example.com"


# ================================================================
# Fake aiohttp session
# ================================================================


class FakeResponse:
    """Async-context-manager response mimicking aiohttp.ClientResponse."""

    def __init__(self, status: int = 200, json_data: Any = None, body: bytes = b""):
        self.status = status
        self._json = json_data
        self._body = body

    async def json(self, content_type: str | None = "application/json") -> Any:
        if self._json is None:
            raise ValueError("Response has no JSON body")
        return self._json

    async def text(self) -> str:
        return self._body.decode()

    async def read(self) -> bytes:
        return self._body

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *exc_info) -> bool:
        return False


class FakeSession:
    """Records requests and answers them from a queue of FakeResponse."""

    def __init__(self):
        self.calls: list[dict[str, Any]] = []
        self.responses: list[FakeResponse] = []
        self.closed = False

    def queue(self, *responses: FakeResponse) -> None:
        self.responses.extend(responses)

    def _next(self) -> FakeResponse:
        if not self.responses:
            raise AssertionError("Unexpected HTTP request")
        return self.responses.pop(0)

    def post(self, url: str, headers: dict | None = None, json: Any = None):
        self.calls.append({"method": "POST", "url": url, "headers": headers, "json": json})
        return self._next()

    def get(self, url: str, headers: dict | None = None, params: dict | None = None):
        self.calls.append(
            {"method": "GET", "url": url, "headers": headers, "params": params}
        )
        return self._next()

    async def close(self) -> None:
        self.closed = True


# ================================================================
# Payload builders
# ================================================================


def sign_body(body: bytes, secret: str = APP_SECRET) -> str:
    digest = hmac.new(secret.encode(), body, hashlib.sha1).hexdigest()
    return f"sha1={digest}"


def build_message(
    msg_type: str,
    content: Any = None,
    msg_id: str = "wamid.HBgM001",
    sender: str = WA_ID,
    timestamp: str = "1700000000",
) -> dict[str, Any]:
    message = {"from": sender, "id": msg_id, "timestamp": timestamp, "type": msg_type}
    if content is not None:
        message[msg_type] = content
    return message


def build_status(
    status: str, msg_id: str = "wamid.OUT001", timestamp: str = "1700000100"
) -> dict[str, Any]:
    return {
        "id": msg_id,
        "status": status,
        "timestamp": timestamp,
        "recipient_id": WA_ID,
    }


def build_notification(
    messages: list[dict] | None = None,
    statuses: list[dict] | None = None,
    contacts: list[dict] | None = None,
    phone_number_id: str = PHONE_NUMBER_ID,
) -> dict[str, Any]:
    value: dict[str, Any] = {
        "messaging_product": "whatsapp",
        "metadata": {
            "display_phone_number": "15550001111",
            "phone_number_id": phone_number_id,
        },
    }
    if messages is not None:
        value["contacts"] = (
            contacts
            if contacts is not None
            else [{"profile": {"name": "Jane Doe"}, "wa_id": WA_ID}]
        )
        value["messages"] = messages
    if statuses is not None:
        value["statuses"] = statuses
    return {
        "object": "whatsapp_business_account",
        "entry": [{"id": "102290129340398", "changes": [{"field": "messages", "value": value}]}],
    }


def encode(payload: dict[str, Any]) -> bytes:
    return json.dumps(payload).encode()


@pytest.fixture
def notification() -> Callable[..., dict[str, Any]]:
    return build_notification


@pytest.fixture
def message() -> Callable[..., dict[str, Any]]:
    return build_message


@pytest.fixture
def status() -> Callable[..., dict[str, Any]]:
    return build_status


@pytest.fixture
def signed() -> Callable[[dict[str, Any]], tuple[bytes, str]]:
    """Encode a payload and return (body, X-Hub-Signature header)."""

    def _signed(payload: dict[str, Any]) -> tuple[bytes, str]:
        body = encode(payload)
        return body, sign_body(body)

    return _signed


# ================================================================
# Collaborators
# ================================================================


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def fake_response() -> type[FakeResponse]:
    return FakeResponse


@pytest.fixture
def settings_provider() -> EnvSettingsProvider:
    return EnvSettingsProvider(
        overrides={
            "app_secret": APP_SECRET,
            "access_token": ACCESS_TOKEN,
            "verify_token": VERIFY_TOKEN,
        }
    )


@pytest.fixture
def event_bus() -> ChannelEventDispatcher:
    return ChannelEventDispatcher()


@pytest.fixture
def attachment_service() -> InMemoryAttachmentService:
    return InMemoryAttachmentService(public_url=PUBLIC_URL)


@pytest.fixture
def captured_events(event_bus) -> list[tuple[str, Any]]:
    """Every hook:chatbot:* event emitted on the bus, in order."""
    captured: list[tuple[str, Any]] = []
    for event_type in ("message", "delivery", "read", "unknown"):
        name = f"hook:chatbot:{event_type}"
        event_bus.on(name, lambda event, name=name: captured.append((name, event)))
    return captured


@pytest_asyncio.fixture
async def handler(
    event_bus, settings_provider, attachment_service, fake_session
) -> WhatsAppChannelHandler:
    channel_handler = WhatsAppChannelHandler(
        event_bus=event_bus,
        settings_provider=settings_provider,
        attachment_service=attachment_service,
        session=fake_session,
        api_version=API_VERSION,
        base_url=GRAPH_URL,
    )
    await channel_handler.init()
    return channel_handler


# Environment setup for tests
@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch):
    """Set up test environment variables and reset the logging context."""
    monkeypatch.setenv("ENVIRONMENT", "DEV")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("WHATSAPP_APP_SECRET", APP_SECRET)
    monkeypatch.setenv("WHATSAPP_ACCESS_TOKEN", ACCESS_TOKEN)
    monkeypatch.setenv("WHATSAPP_VERIFY_TOKEN", VERIFY_TOKEN)
    yield
    clear_request_context()
