"""
wachannel core components: configuration, logging and the event bus.

The channel handler and application factory live in ``core.channel_handler``
and ``core.channel_app``.
"""

from .config.settings import settings
from .logging import get_app_logger, get_logger, setup_app_logging

__all__ = ["get_app_logger", "get_logger", "settings", "setup_app_logging"]
