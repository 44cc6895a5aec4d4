"""
FastAPI application for running the WhatsApp channel adapter standalone.

A host engine normally embeds ``WhatsAppChannelHandler`` with its own event
bus, settings and attachment storage. ``create_app`` wires the in-process
defaults instead, which is what the CLI serves and what tests drive.
"""

from contextlib import asynccontextmanager

import aiohttp
import uvicorn
from fastapi import FastAPI

from wachannel.api.middleware import ErrorHandlerMiddleware, RequestLoggingMiddleware
from wachannel.api.routes import attachments_router, create_webhook_router, health_router
from wachannel.core.channel_handler import WhatsAppChannelHandler
from wachannel.core.config.channel_settings import EnvSettingsProvider
from wachannel.core.config.settings import settings
from wachannel.core.events.event_dispatcher import ChannelEventDispatcher
from wachannel.core.logging.logger import get_app_logger, setup_app_logging
from wachannel.domain.interfaces.attachment_interface import IAttachmentService
from wachannel.domain.interfaces.event_bus_interface import IEventBus
from wachannel.domain.interfaces.settings_interface import ISettingsProvider
from wachannel.persistence.memory import InMemoryAttachmentService


def create_http_session() -> aiohttp.ClientSession:
    """Persistent session shared by every Graph API client of the process."""
    connector = aiohttp.TCPConnector(
        limit=100,
        keepalive_timeout=30,
        enable_cleanup_closed=True,
    )
    return aiohttp.ClientSession(
        connector=connector, timeout=aiohttp.ClientTimeout(total=30)
    )


def create_app(
    event_bus: IEventBus | None = None,
    settings_provider: ISettingsProvider | None = None,
    attachment_service: IAttachmentService | None = None,
    session: aiohttp.ClientSession | None = None,
) -> FastAPI:
    """
    Build the adapter application.

    Args:
        event_bus: Bus receiving ``hook:chatbot:*`` events (in-process dispatcher by default)
        settings_provider: whatsapp_channel settings (environment backed by default)
        attachment_service: Attachment storage (in-memory by default)
        session: HTTP session to reuse; created and closed by the app when omitted

    Returns:
        FastAPI application serving the webhook, health and attachment routes
    """
    event_bus = event_bus or ChannelEventDispatcher()
    settings_provider = settings_provider or EnvSettingsProvider()
    attachment_service = attachment_service or InMemoryAttachmentService()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_app_logging()
        logger = get_app_logger()
        logger.info(f"🚀 Starting WhatsApp channel adapter v{settings.version}")
        logger.info(f"📊 Environment: {settings.environment}")
        logger.info(f"📝 Log level: {settings.log_level}")

        http_session = session or create_http_session()
        handler = WhatsAppChannelHandler(
            event_bus=event_bus,
            settings_provider=settings_provider,
            attachment_service=attachment_service,
            session=http_session,
        )
        await handler.init()

        app.state.http_session = http_session
        app.state.event_bus = event_bus
        app.state.attachment_service = attachment_service
        app.state.channel_handler = handler

        logger.info(f"📱 WhatsApp webhook: {settings.public_url}{settings.webhook_path}")
        logger.info(f"🏥 Health Check: {settings.public_url}/health")

        try:
            yield
        finally:
            logger.info("🛑 Shutting down WhatsApp channel adapter...")
            if session is None:
                await http_session.close()
                logger.info("🌐 HTTP session closed")
            del app.state.channel_handler

    app = FastAPI(
        title="WhatsApp Channel",
        description="WhatsApp Cloud API channel adapter for the chatbot engine",
        version=settings.version,
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )

    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(health_router)
    app.include_router(create_webhook_router())
    if isinstance(attachment_service, InMemoryAttachmentService):
        app.include_router(attachments_router)

    return app


def run(host: str = "0.0.0.0", port: int | None = None, **kwargs) -> None:
    """Serve the default application with uvicorn."""
    uvicorn.run(
        create_app(),
        host=host,
        port=port or settings.port,
        log_level=settings.log_level.lower(),
        **kwargs,
    )
