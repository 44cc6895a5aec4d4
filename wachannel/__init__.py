"""
wachannel - WhatsApp Cloud API channel adapter for the chatbot engine.

Receives WhatsApp webhook notifications, normalizes them into engine events
(``hook:chatbot:<type>``) and translates outgoing engine envelopes into Graph
API messages.

Clean Import Interface:
- Only the adapter essentials are exposed at top level
- Schemas and wire models are available via their subpackages
"""

from .core.channel_app import create_app
from .core.channel_handler import WebhookResponse, WhatsAppChannelHandler
from .core.config.channel_settings import EnvSettingsProvider
from .core.events.event_dispatcher import ChannelEventDispatcher
from .domain.factories.message_factory import TranslationContext, WhatsAppMessageFactory
from .persistence.memory import InMemoryAttachmentService
from .processors.whatsapp_processor import WhatsAppEventWrapper

# Dynamic version from pyproject.toml
from .core.config.settings import settings

__version__ = settings.version

__all__ = [
    "ChannelEventDispatcher",
    "EnvSettingsProvider",
    "InMemoryAttachmentService",
    "TranslationContext",
    "WebhookResponse",
    "WhatsAppChannelHandler",
    "WhatsAppEventWrapper",
    "WhatsAppMessageFactory",
    "create_app",
]
