"""Attachment storage backends."""

from .memory import InMemoryAttachmentService

__all__ = ["InMemoryAttachmentService"]
