"""
Settings storage interface.

The host engine owns the persisted whatsapp_channel setting group; the adapter
only reads it and reacts to updates.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from wachannel.core.config.channel_settings import ChannelSettings


class ISettingsProvider(ABC):
    """Read access to the whatsapp_channel setting group."""

    @abstractmethod
    async def get_settings(self) -> "ChannelSettings":
        """Return the current channel settings."""
        pass

    @abstractmethod
    async def update_setting(self, label: str, value: Any) -> "ChannelSettings":
        """
        Persist a single setting and return the refreshed settings.

        Callers are expected to emit ``hook:whatsapp_channel:<label>`` afterwards
        so that long-lived components (the transport client) can react.
        """
        pass
