"""Collaborator interfaces the adapter depends on."""

from .attachment_interface import IAttachmentService
from .event_bus_interface import EventListener, IEventBus
from .settings_interface import ISettingsProvider

__all__ = ["EventListener", "IAttachmentService", "IEventBus", "ISettingsProvider"]
