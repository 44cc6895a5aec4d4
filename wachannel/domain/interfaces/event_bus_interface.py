"""
Host event bus interface.

Events are addressed by name, e.g. ``hook:chatbot:message`` for normalized
inbound events or ``hook:whatsapp_channel:access_token`` for settings updates.
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any

EventListener = Callable[[Any], Awaitable[None] | None]


class IEventBus(ABC):
    """Named publish/subscribe bus shared with the host engine."""

    @abstractmethod
    def on(self, event_name: str, listener: EventListener) -> None:
        """Register a listener for an event name."""
        pass

    @abstractmethod
    def off(self, event_name: str, listener: EventListener) -> None:
        """Remove a previously registered listener."""
        pass

    @abstractmethod
    async def emit(self, event_name: str, payload: Any) -> Any:
        """
        Deliver payload to every listener of event_name, in registration order.

        The return value is implementation specific; the adapter ignores it.
        """
        pass
