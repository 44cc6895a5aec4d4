"""
WhatsApp Graph API client.

Key Design Decisions:
- One client holds one access token; rotating the token means building a new
  client, never mutating this one
- The aiohttp session is injected (owned by the FastAPI lifespan)
- No retries: non-2xx responses raise TransportError for the caller to handle
"""

from typing import Any

import aiohttp
from pydantic import BaseModel

from wachannel.core.config.channel_settings import ChannelConfigurationError
from wachannel.core.config.settings import settings
from wachannel.core.logging.logger import get_logger
from wachannel.messaging.whatsapp.models.basic_models import (
    SendMessageResult,
    WireMessageBase,
)
from wachannel.messaging.whatsapp.utils.error_helpers import (
    TransportError,
    is_authentication_error,
)

MESSAGING_PRODUCT = "whatsapp"


class MediaMetadata(BaseModel):
    """Answer of ``GET /<version>/<media_id>``; the url expires after 5 minutes."""

    id: str
    url: str
    mime_type: str | None = None
    sha256: str | None = None
    file_size: int | None = None
    messaging_product: str | None = None


class WhatsAppUrlBuilder:
    """Builds URLs for Graph API endpoints."""

    def __init__(self, base_url: str, api_version: str):
        self.base_url = base_url.rstrip("/")
        self.api_version = api_version

    def get_messages_url(self, phone_number_id: str) -> str:
        return f"{self.base_url}/{self.api_version}/{phone_number_id}/messages"

    def get_endpoint_url(self, endpoint: str) -> str:
        return f"{self.base_url}/{self.api_version}/{endpoint.lstrip('/')}"


class GraphApiClient:
    """
    Graph API client for the WhatsApp channel.

    Args:
        session: Persistent aiohttp session (managed by FastAPI lifespan)
        access_token: WhatsApp Business API access token
        api_version: Graph API version, e.g. "v20.0"
        base_url: Graph API base URL
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        access_token: str,
        api_version: str = settings.api_version,
        base_url: str = settings.base_url,
        logger: Any | None = None,
    ):
        self.session = session
        self._access_token = access_token
        self.logger = logger or get_logger(__name__)
        self.url_builder = WhatsAppUrlBuilder(base_url, api_version)

    @property
    def api_version(self) -> str:
        return self.url_builder.api_version

    @property
    def has_access_token(self) -> bool:
        return bool(self._access_token)

    def _get_headers(self, include_content_type: bool = True) -> dict[str, str]:
        if not self._access_token:
            raise ChannelConfigurationError("access_token")
        headers = {"Authorization": f"Bearer {self._access_token}"}
        if include_content_type:
            headers["Content-Type"] = "application/json"
        return headers

    async def _read_error_body(self, response: aiohttp.ClientResponse) -> Any:
        try:
            return await response.json(content_type=None)
        except (aiohttp.ContentTypeError, ValueError):
            return await response.text()

    async def _raise_for_status(
        self, response: aiohttp.ClientResponse, url: str
    ) -> None:
        if response.status < 400:
            return
        error = TransportError(response.status, await self._read_error_body(response), url)
        if is_authentication_error(error):
            self.logger.error(
                f"WhatsApp access token rejected ({error.status}): {error}. "
                "Update the whatsapp_channel access_token setting."
            )
        else:
            self.logger.error(f"Graph API error on {url}: {error}")
        raise error

    async def post_request(self, url: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Send a JSON POST request to the Graph API."""
        headers = self._get_headers()
        self.logger.debug(f"POST {url} payload: {payload}")
        async with self.session.post(url, headers=headers, json=payload) as response:
            await self._raise_for_status(response, url)
            response_data = await response.json()
            self.logger.debug(f"Response: {response_data}")
            return response_data

    async def get_request(
        self, endpoint: str, params: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Send a GET request to a Graph API endpoint (without base URL)."""
        url = self.url_builder.get_endpoint_url(endpoint)
        headers = self._get_headers()
        async with self.session.get(url, headers=headers, params=params) as response:
            await self._raise_for_status(response, url)
            response_data = await response.json()
            self.logger.debug(
                f"GET {url} with params: {params} returned: {response_data}"
            )
            return response_data

    # ================================================================
    # Messages
    # ================================================================

    async def send_message(
        self,
        message: WireMessageBase | dict[str, Any],
        phone_number_id: str,
        recipient_id: str,
    ) -> SendMessageResult:
        """
        Send one wire message to a customer.

        Args:
            message: Wire message (without addressing fields)
            phone_number_id: Business phone number ID sending the message
            recipient_id: Customer WhatsApp ID

        Returns:
            SendMessageResult with the provider message id

        Raises:
            ValueError: If phone_number_id or recipient_id is empty
            TransportError: On non-2xx responses
        """
        if not phone_number_id:
            raise ValueError("Phone number ID is required")
        if not recipient_id:
            raise ValueError("Recipient ID is required")

        body = message.to_payload() if isinstance(message, WireMessageBase) else dict(message)
        payload = {
            "messaging_product": MESSAGING_PRODUCT,
            "recipient_type": "individual",
            "to": recipient_id,
            **body,
        }
        response = await self.post_request(
            self.url_builder.get_messages_url(phone_number_id), payload
        )
        result = SendMessageResult.from_response(
            response, recipient=recipient_id, phone_number_id=phone_number_id
        )
        self.logger.info(
            f"Sent {payload.get('type')} message {result.message_id} to {recipient_id}"
        )
        return result

    # ================================================================
    # Media
    # ================================================================

    async def get_media_url(self, media_id: str, phone_number_id: str) -> MediaMetadata:
        """
        Resolve a media id to its (short-lived) download URL and metadata.

        Raises:
            ValueError: If media_id is empty
            TransportError: On non-2xx responses
        """
        if not media_id:
            raise ValueError("Media ID is required")
        params = {"phone_number_id": phone_number_id} if phone_number_id else None
        data = await self.get_request(media_id, params=params)
        return MediaMetadata.model_validate(data)

    async def download_media(self, url: str) -> bytes:
        """Download media content from a URL returned by get_media_url."""
        headers = self._get_headers(include_content_type=False)
        async with self.session.get(url, headers=headers) as response:
            await self._raise_for_status(response, url)
            return await response.read()

    # ================================================================
    # Business profile
    # ================================================================

    async def get_business_profile(
        self, phone_number_id: str, fields: str | None = None
    ) -> dict[str, Any]:
        """
        Fetch the business phone number node (display number, verified name, quality).

        Raises:
            ValueError: If phone_number_id is empty
            TransportError: On non-2xx responses
        """
        if not phone_number_id:
            raise ValueError("Phone number ID is required")
        params = {"fields": fields} if fields else None
        return await self.get_request(phone_number_id, params=params)
