"""
In-process event dispatcher.

Default implementation of the host event bus used when the adapter runs on its
own (CLI, tests). Listeners run sequentially in registration order; a failing
listener is logged and does not stop the others.
"""

import inspect
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any

from wachannel.core.logging.logger import get_logger
from wachannel.domain.interfaces.event_bus_interface import EventListener, IEventBus

CHATBOT_EVENT_PREFIX = "hook:chatbot:"
SETTINGS_EVENT_PREFIX = "hook:whatsapp_channel:"


def chatbot_event(event_type: str) -> str:
    """Name of the bus event carrying a normalized inbound event."""
    return f"{CHATBOT_EVENT_PREFIX}{event_type}"


def settings_event(label: str) -> str:
    """Name of the bus event announcing a whatsapp_channel setting update."""
    return f"{SETTINGS_EVENT_PREFIX}{label}"


class ChannelEventDispatcher(IEventBus):
    """Named async publish/subscribe bus."""

    def __init__(self):
        self.logger = get_logger(__name__)
        self._listeners: dict[str, list[EventListener]] = defaultdict(list)

    def on(self, event_name: str, listener: EventListener) -> None:
        self._listeners[event_name].append(listener)
        self.logger.debug(
            f"Listener {getattr(listener, '__qualname__', listener)} registered for {event_name}"
        )

    def off(self, event_name: str, listener: EventListener) -> None:
        try:
            self._listeners[event_name].remove(listener)
        except ValueError:
            self.logger.warning(f"Listener not registered for {event_name}")

    def listener_count(self, event_name: str) -> int:
        return len(self._listeners.get(event_name, []))

    async def emit(self, event_name: str, payload: Any) -> dict[str, Any]:
        """
        Deliver payload to every listener of event_name.

        Returns:
            Dictionary with the number of listeners notified and failed
        """
        listeners = list(self._listeners.get(event_name, []))
        if not listeners:
            self.logger.debug(f"No listener for {event_name}")

        failed = 0
        for listener in listeners:
            try:
                result = listener(payload)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                failed += 1
                self.logger.error(
                    f"Listener failed on {event_name}: {e}", exc_info=True
                )

        return {
            "event": event_name,
            "notified": len(listeners) - failed,
            "failed": failed,
            "processed_at": datetime.now(timezone.utc).isoformat(),
        }
