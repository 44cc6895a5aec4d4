"""
Domain layer of the adapter.

Host-facing models and the interfaces of the collaborators the adapter depends
on (event bus, settings, attachment storage).
"""

from .interfaces import IAttachmentService, IEventBus, ISettingsProvider
from .models import Attachment, AttachmentCreate, SubscriberChannel, SubscriberCreate

__all__ = [
    "Attachment",
    "AttachmentCreate",
    "IAttachmentService",
    "IEventBus",
    "ISettingsProvider",
    "SubscriberChannel",
    "SubscriberCreate",
]
