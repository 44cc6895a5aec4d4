"""
WhatsApp webhook routes.

Both the verification handshake (GET) and notifications (POST) are served at
the same path, which is the callback URL configured in the Meta app dashboard.
"""

from fastapi import APIRouter, Depends, Query, Request

from wachannel.api.controllers import WebhookController
from wachannel.api.dependencies import get_channel_handler
from wachannel.core.channel_handler import WhatsAppChannelHandler
from wachannel.core.config.settings import settings


def create_webhook_router(path: str | None = None) -> APIRouter:
    """
    Create the webhook router.

    Args:
        path: Callback path, defaults to ``settings.webhook_path``

    Returns:
        APIRouter configured with the GET and POST webhook endpoints
    """
    webhook_path = path or settings.webhook_path
    webhook_controller = WebhookController()

    router = APIRouter(
        tags=["Webhooks"],
        responses={
            400: {"description": "Bad Request - Not a WhatsApp notification"},
            500: {"description": "Verification failed or signature mismatch"},
        },
    )

    @router.get(webhook_path)
    async def verify_webhook(
        hub_mode: str = Query(None, alias="hub.mode"),
        hub_verify_token: str = Query(None, alias="hub.verify_token"),
        hub_challenge: str = Query(None, alias="hub.challenge"),
        handler: WhatsAppChannelHandler = Depends(get_channel_handler),
    ):
        """Echo hub.challenge when hub.verify_token matches the configured token."""
        return await webhook_controller.verify_webhook(
            handler=handler,
            hub_mode=hub_mode,
            hub_verify_token=hub_verify_token,
            hub_challenge=hub_challenge,
        )

    @router.post(webhook_path)
    async def process_webhook(
        request: Request,
        handler: WhatsAppChannelHandler = Depends(get_channel_handler),
    ):
        """Verify, parse and dispatch a WhatsApp notification."""
        return await webhook_controller.process_webhook(request, handler)

    return router
