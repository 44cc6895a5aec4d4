"""
FastAPI dependency injection for the WhatsApp channel adapter.
"""

from .channel_dependencies import get_attachment_service, get_channel_handler

__all__ = ["get_attachment_service", "get_channel_handler"]
