"""
API controllers for the WhatsApp channel adapter.
"""

from .webhook_controller import WebhookController

__all__ = ["WebhookController"]
