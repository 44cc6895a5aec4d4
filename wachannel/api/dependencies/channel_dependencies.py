"""
Channel dependency injection.

The channel handler and attachment service are created once in the app
lifespan and kept on ``app.state``; routes get them through these dependencies.
"""

from fastapi import HTTPException, Request

from wachannel.core.channel_handler import WhatsAppChannelHandler
from wachannel.domain.interfaces.attachment_interface import IAttachmentService


async def get_channel_handler(request: Request) -> WhatsAppChannelHandler:
    """Get the initialized WhatsApp channel handler.

    Raises:
        HTTPException: 503 while the application is still starting
    """
    handler = getattr(request.app.state, "channel_handler", None)
    if handler is None:
        raise HTTPException(status_code=503, detail="WhatsApp channel is not ready")
    return handler


async def get_attachment_service(request: Request) -> IAttachmentService:
    service = getattr(request.app.state, "attachment_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Attachment service is not ready")
    return service
