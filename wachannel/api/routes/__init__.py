"""API routes for the WhatsApp channel adapter."""

from .attachments import router as attachments_router
from .health import router as health_router
from .webhooks import create_webhook_router

__all__ = ["attachments_router", "create_webhook_router", "health_router"]
