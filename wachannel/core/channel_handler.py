"""
WhatsApp channel handler.

The handler is the adapter's single entry point for the host engine:

- ``subscribe`` answers the GET verification handshake
- ``handle_notification`` verifies, parses and dispatches a POSTed notification,
  emitting one ``hook:chatbot:<event type>`` event per message or status
- ``send_message`` translates an outgoing envelope and sends it
- ``get_user_data`` builds the subscriber record of a new customer

It owns the only long-lived state of the adapter: the Graph API client bound to
the current access token, replaced wholesale when the token setting changes.
"""

import json
import mimetypes
from dataclasses import dataclass
from typing import Any

import aiohttp

from wachannel.core.config.channel_settings import (
    CHANNEL_NAME,
    ChannelConfigurationError,
    ChannelSettings,
    SettingLabel,
)
from wachannel.core.config.settings import settings
from wachannel.core.events.event_dispatcher import chatbot_event, settings_event
from wachannel.core.logging.context import clear_request_context, set_request_context
from wachannel.core.logging.logger import get_logger
from wachannel.domain.factories.message_factory import (
    TranslationContext,
    WhatsAppMessageFactory,
)
from wachannel.domain.interfaces.attachment_interface import IAttachmentService
from wachannel.domain.interfaces.event_bus_interface import IEventBus
from wachannel.domain.interfaces.settings_interface import ISettingsProvider
from wachannel.domain.models.attachment import Attachment, AttachmentCreate
from wachannel.domain.models.subscriber import SubscriberChannel, SubscriberCreate
from wachannel.messaging.whatsapp.client.whatsapp_client import GraphApiClient
from wachannel.processors.base_processor import InvalidEventError
from wachannel.processors.whatsapp_processor import (
    RawUnit,
    WebhookShapeError,
    WhatsAppEventWrapper,
    WhatsAppWebhookProcessor,
)
from wachannel.schemas.core.envelope import AttachmentEnvelope, AttachmentRef, BlockOptions
from wachannel.schemas.core.types import IncomingMessageType, StdEventType
from wachannel.schemas.whatsapp.webhook_container import WHATSAPP_OBJECT, WhatsAppWebhook
from wachannel.webhooks.whatsapp.validators import (
    SIGNATURE_MISMATCH,
    WebhookSignatureError,
    WebhookVerificationError,
    verify_signature,
    verify_subscription,
)

MISSING_OBJECT = "The whatsapp_business_account parameter is missing!"
MISSING_ENTRY = "Webhook received no entry data."
INVALID_BODY = "Webhook received an invalid notification body."


@dataclass(frozen=True)
class WebhookResponse:
    """Status code and body the HTTP layer should answer with."""

    status_code: int
    body: dict[str, Any] | str

    @classmethod
    def error(cls, status_code: int, message: str) -> "WebhookResponse":
        return cls(status_code, {"err": message})

    @property
    def ok(self) -> bool:
        return self.status_code == 200


class WhatsAppChannelHandler:
    """WhatsApp Cloud API channel for the chatbot engine."""

    def __init__(
        self,
        event_bus: IEventBus,
        settings_provider: ISettingsProvider,
        attachment_service: IAttachmentService,
        session: aiohttp.ClientSession,
        api_version: str = settings.api_version,
        base_url: str = settings.base_url,
        message_factory: WhatsAppMessageFactory | None = None,
        processor: WhatsAppWebhookProcessor | None = None,
    ):
        self.logger = get_logger(__name__)
        self.event_bus = event_bus
        self.settings_provider = settings_provider
        self.attachment_service = attachment_service
        self.session = session
        self.api_version = api_version
        self.base_url = base_url
        self.message_factory = message_factory or WhatsAppMessageFactory()
        self.processor = processor or WhatsAppWebhookProcessor()
        self._client: GraphApiClient | None = None

    @property
    def name(self) -> str:
        return CHANNEL_NAME

    # ================================================================
    # Lifecycle & credentials
    # ================================================================

    async def init(self) -> None:
        """Build the Graph API client and listen for access token updates."""
        self.logger.debug("WhatsApp channel handler: initialization ...")
        channel_settings = await self.get_settings()
        self._client = self._build_client(channel_settings.access_token)
        self.event_bus.on(
            settings_event(SettingLabel.ACCESS_TOKEN.value), self.on_access_token_update
        )
        if not channel_settings.access_token:
            self.logger.warning(
                "WhatsApp access token is not set; outbound calls will fail until it is"
            )

    async def get_settings(self) -> ChannelSettings:
        return await self.settings_provider.get_settings()

    def _build_client(self, access_token: str) -> GraphApiClient:
        return GraphApiClient(
            self.session,
            access_token,
            api_version=self.api_version,
            base_url=self.base_url,
        )

    @property
    def client(self) -> GraphApiClient:
        if self._client is None:
            raise RuntimeError("WhatsApp channel handler is not initialized")
        return self._client

    async def on_access_token_update(self, setting: Any) -> None:
        """Swap in a client bound to the new token; in-flight calls keep the old one."""
        value = setting
        if isinstance(setting, dict):
            value = setting.get("value")
        elif hasattr(setting, "value"):
            value = setting.value
        self._client = self._build_client(value or "")
        self.logger.info("WhatsApp access token updated, Graph API client replaced")

    async def update_setting(self, label: str, value: Any) -> ChannelSettings:
        """Persist a whatsapp_channel setting and announce it on the bus."""
        updated = await self.settings_provider.update_setting(label, value)
        await self.event_bus.emit(settings_event(label), value)
        return updated

    # ================================================================
    # Webhook: subscription handshake
    # ================================================================

    async def subscribe(
        self, mode: str | None, token: str | None, challenge: str | None
    ) -> WebhookResponse:
        """Answer the GET verification handshake."""
        self.logger.debug("WhatsApp channel handler: subscribing ...")
        channel_settings = await self.get_settings()
        try:
            verify_token = channel_settings.require(SettingLabel.VERIFY_TOKEN)
            echoed = verify_subscription(mode, token, challenge, verify_token)
        except (ChannelConfigurationError, WebhookVerificationError) as e:
            self.logger.warning(str(e))
            return WebhookResponse.error(500, str(e))

        self.logger.info("WhatsApp webhook subscription verified")
        return WebhookResponse(200, echoed)

    # ================================================================
    # Webhook: notifications
    # ================================================================

    async def verify_signature(self, raw_body: bytes, signature: str | None) -> None:
        """
        Check the X-Hub-Signature header against the configured app secret.

        Raises:
            ChannelConfigurationError: If app_secret is not set
            WebhookSignatureError: If the header is missing or does not match
        """
        channel_settings = await self.get_settings()
        verify_signature(
            channel_settings.require(SettingLabel.APP_SECRET), raw_body, signature
        )

    async def handle_notification(
        self, raw_body: bytes, signature: str | None
    ) -> WebhookResponse:
        """
        Verify and dispatch one notification.

        Failures before dispatch answer ``{"err": ...}``; once dispatch starts
        the answer is always 200 so the provider does not resend the batch.
        """
        try:
            await self.verify_signature(raw_body, signature)
        except ChannelConfigurationError as e:
            self.logger.error(f"{e} Rejecting notification")
            return WebhookResponse.error(500, str(e))
        except WebhookSignatureError:
            self.logger.warning("Webhook signature mismatch, rejecting notification")
            return WebhookResponse.error(500, SIGNATURE_MISMATCH)

        try:
            data = json.loads(raw_body)
        except ValueError:
            return WebhookResponse.error(400, INVALID_BODY)

        if not isinstance(data, dict) or data.get("object") != WHATSAPP_OBJECT:
            return WebhookResponse.error(400, MISSING_OBJECT)
        if "entry" not in data:
            self.logger.error(MISSING_ENTRY)
            return WebhookResponse.error(500, MISSING_ENTRY)

        try:
            webhook = self.processor.parse_webhook_container(data)
        except WebhookShapeError as e:
            self.logger.error(str(e))
            return WebhookResponse.error(400, INVALID_BODY)

        processed = await self.dispatch(webhook)
        self.logger.debug(f"Notification dispatched ({processed} events emitted)")
        return WebhookResponse(200, {"success": True})

    async def dispatch(self, webhook: WhatsAppWebhook) -> int:
        """
        Emit one event per message/status, sequentially in payload order.

        Returns:
            Number of events emitted
        """
        emitted = 0
        for raw in self.processor.iter_raw_units(webhook):
            try:
                await self._process_unit(raw)
                emitted += 1
            except Exception as e:
                self.logger.error(
                    f"Something went wrong while handling a {raw.kind}: {e}",
                    exc_info=True,
                )
            finally:
                clear_request_context()
        return emitted

    async def _process_unit(self, raw: RawUnit) -> WhatsAppEventWrapper:
        event = WhatsAppEventWrapper(self.processor.create_unit(raw), CHANNEL_NAME)
        set_request_context(
            tenant_id=event.get_phone_number_id(),
            user_id=event.get_sender_foreign_id(),
        )

        if event.get_message_type() == IncomingMessageType.ATTACHMENT:
            event.set_attachment(await self.fetch_attachment(event))

        event_type = event.get_event_type()
        if event_type == StdEventType.UNKNOWN:
            self.logger.warning(f"Unknown event received: {event.get_raw()}")
        else:
            self.logger.info(f"📨 {event_type.value} {event.get_id()}")

        await self.event_bus.emit(chatbot_event(event_type.value), event)
        return event

    async def fetch_attachment(self, event: WhatsAppEventWrapper) -> Attachment:
        """Download the media of a message and store it as a host attachment."""
        media = event.get_media_reference()
        if media is None:
            raise InvalidEventError("Only media messages carry an attachment")

        metadata = await self.client.get_media_url(media.id, event.get_phone_number_id())
        content = await self.client.download_media(metadata.url)
        mime_type = metadata.mime_type or media.mime_type or "application/octet-stream"
        name = media.filename or f"{media.id}{mimetypes.guess_extension(mime_type) or ''}"

        return await self.attachment_service.store(
            content,
            AttachmentCreate(
                name=name,
                type=mime_type,
                size=len(content),
                channel={CHANNEL_NAME: {"id": media.id}},
            ),
        )

    # ================================================================
    # Outbound
    # ================================================================

    async def send_message(
        self,
        event: WhatsAppEventWrapper,
        envelope: Any,
        options: BlockOptions | None = None,
    ) -> dict[str, str]:
        """
        Send an envelope as a reply to the customer of event.

        Returns:
            {"mid": <provider message id>}

        Raises:
            UnsupportedFormatError, UnsupportedAttachmentTypeError: Translation failures
            TransportError: If the Graph API rejects the message
        """
        envelope = self.message_factory.parse_envelope(envelope)
        envelope = await self._load_attachment(envelope)
        context = TranslationContext(
            url_resolver=self.attachment_service.get_public_url, options=options
        )
        message = self.message_factory.translate(envelope, context)
        result = await self.client.send_message(
            message, event.get_phone_number_id(), event.get_sender_foreign_id()
        )
        return {"mid": result.message_id}

    async def _load_attachment(self, envelope: Any) -> Any:
        """Replace an id-only attachment reference by the stored attachment."""
        if not isinstance(envelope, AttachmentEnvelope):
            return envelope
        outgoing = envelope.message.attachment
        if not isinstance(outgoing.payload, AttachmentRef):
            return envelope

        attachment = await self.attachment_service.find_by_id(outgoing.payload.id)
        if attachment is None:
            raise ValueError(f"Attachment {outgoing.payload.id} not found")
        message = envelope.message.model_copy(
            update={"attachment": outgoing.model_copy(update={"payload": attachment})}
        )
        return envelope.model_copy(update={"message": message})

    # ================================================================
    # Profiles
    # ================================================================

    async def get_user_data(self, event: WhatsAppEventWrapper) -> SubscriberCreate:
        """Build the subscriber record of the customer who sent event."""
        contact = event.get_contact()
        if contact is None:
            raise InvalidEventError("No contact profile attached to this event")

        first_name, last_name = contact.split_name()
        return SubscriberCreate(
            foreign_id=contact.wa_id,
            first_name=first_name,
            last_name=last_name,
            gender="unknown",
            channel=SubscriberChannel(name=CHANNEL_NAME),
            language=settings.default_language,
        )

    async def get_business_profile(self, phone_number_id: str) -> dict[str, Any]:
        return await self.client.get_business_profile(phone_number_id)
