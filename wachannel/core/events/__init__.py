from .event_dispatcher import (
    CHATBOT_EVENT_PREFIX,
    SETTINGS_EVENT_PREFIX,
    ChannelEventDispatcher,
    chatbot_event,
    settings_event,
)

__all__ = [
    "CHATBOT_EVENT_PREFIX",
    "SETTINGS_EVENT_PREFIX",
    "ChannelEventDispatcher",
    "chatbot_event",
    "settings_event",
]
