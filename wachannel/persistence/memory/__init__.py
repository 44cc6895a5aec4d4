"""
Memory-based attachment storage.

Usage:
    service = InMemoryAttachmentService(public_url="https://bot.example.com")
"""

from .attachment_store import ATTACHMENTS_PATH, InMemoryAttachmentService

__all__ = ["ATTACHMENTS_PATH", "InMemoryAttachmentService"]
