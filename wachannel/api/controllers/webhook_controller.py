"""
Webhook controller.

Routes handle HTTP concerns (query aliases, raw body, headers); the controller
hands them to the channel handler and turns its WebhookResponse into a
FastAPI response.
"""

from fastapi import Request
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.responses import Response

from wachannel.core.channel_handler import WebhookResponse, WhatsAppChannelHandler
from wachannel.core.logging.logger import get_logger
from wachannel.webhooks.whatsapp.validators import SIGNATURE_HEADER


class WebhookController:
    """Bridges the webhook routes and the WhatsApp channel handler."""

    def __init__(self):
        self.logger = get_logger(__name__)

    async def verify_webhook(
        self,
        handler: WhatsAppChannelHandler,
        hub_mode: str | None = None,
        hub_verify_token: str | None = None,
        hub_challenge: str | None = None,
    ) -> Response:
        """
        Handle the webhook verification (challenge-response) request.

        Returns:
            PlainTextResponse with the challenge if verification succeeds,
            JSONResponse ``{"err": ...}`` otherwise
        """
        self.logger.info(f"Webhook verification request (mode: {hub_mode})")
        result = await handler.subscribe(hub_mode, hub_verify_token, hub_challenge)
        return self.to_response(result)

    async def process_webhook(
        self, request: Request, handler: WhatsAppChannelHandler
    ) -> Response:
        """
        Process a notification POST.

        The raw body is read untouched since the signature covers its exact bytes.
        """
        raw_body = await request.body()
        result = await handler.handle_notification(
            raw_body, request.headers.get(SIGNATURE_HEADER)
        )
        if not result.ok:
            self.logger.warning(
                f"Webhook notification rejected ({result.status_code}): {result.body}"
            )
        return self.to_response(result)

    @staticmethod
    def to_response(result: WebhookResponse) -> Response:
        if isinstance(result.body, str):
            return PlainTextResponse(content=result.body, status_code=result.status_code)
        return JSONResponse(content=result.body, status_code=result.status_code)
