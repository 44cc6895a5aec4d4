"""
Health check endpoints for the WhatsApp channel adapter.
"""

import time
from typing import Any

from fastapi import APIRouter, Depends

from wachannel.api.dependencies import get_channel_handler
from wachannel.core.channel_handler import WhatsAppChannelHandler
from wachannel.core.config.settings import settings
from wachannel.core.logging.logger import get_logger

logger = get_logger(__name__)
router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict[str, Any]:
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": time.time(),
        "environment": {
            "environment": settings.environment,
            "version": settings.version,
            "log_level": settings.log_level,
        },
    }


@router.get("/health/detailed")
async def detailed_health_check(
    handler: WhatsAppChannelHandler = Depends(get_channel_handler),
) -> dict[str, Any]:
    """
    Detailed health check with channel configuration.

    Reports which credentials are set, never their values.
    """
    channel_settings = await handler.get_settings()
    detailed_data = {
        "status": "healthy",
        "timestamp": time.time(),
        "application": {
            "name": handler.name,
            "version": settings.version,
            "environment": settings.environment,
            "is_development": settings.is_development,
        },
        "configuration": {
            "api_version": settings.api_version,
            "base_url": settings.base_url,
            "webhook_path": settings.webhook_path,
            "public_url": settings.public_url,
        },
        "channel": {
            "app_secret_configured": bool(channel_settings.app_secret),
            "access_token_configured": bool(channel_settings.access_token),
            "verify_token_configured": bool(channel_settings.verify_token),
        },
    }

    logger.info("Detailed health check completed")
    return detailed_data
