"""
Main webhook container models for WhatsApp Business Platform.

Messages and statuses are kept as raw dicts at this level and parsed one unit
at a time (see ``WhatsAppWebhookProcessor.iter_raw_units``), so a single
malformed unit cannot reject the whole notification.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wachannel.schemas.whatsapp.base_models import WhatsAppContact, WhatsAppMetadata

WHATSAPP_OBJECT = "whatsapp_business_account"


class WebhookValue(BaseModel):
    """
    The core value object containing webhook payload data.

    A value carrying messages yields message units, a value carrying statuses
    yields status units; the two are never merged.
    """

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    messaging_product: Literal["whatsapp"] = "whatsapp"
    metadata: WhatsAppMetadata
    contacts: list[WhatsAppContact] | None = None
    messages: list[dict[str, Any]] | None = None
    statuses: list[dict[str, Any]] | None = None
    errors: list[dict[str, Any]] | None = None

    @field_validator("messages", "statuses", "errors", "contacts")
    @classmethod
    def validate_arrays_not_empty(cls, v: list | None) -> list | None:
        """Convert empty arrays to None for cleaner logic."""
        if v is not None and len(v) == 0:
            return None
        return v

    def get_contact(self, wa_id: str | None) -> WhatsAppContact | None:
        """Return the contact matching wa_id, else the first contact."""
        if not self.contacts:
            return None
        for contact in self.contacts:
            if contact.wa_id == wa_id:
                return contact
        return self.contacts[0]


class WebhookChange(BaseModel):
    """Change object describing what changed in the webhook."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    field: str = Field("messages", description="Usually 'messages'")
    value: WebhookValue


class WebhookEntry(BaseModel):
    """Entry object for a WhatsApp Business Account webhook."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    id: str = Field(..., description="WhatsApp Business Account ID")
    changes: list[WebhookChange] = Field(default_factory=list)


class WhatsAppWebhook(BaseModel):
    """
    Top-level WhatsApp Business Platform webhook model.

    This is the root model for all WhatsApp webhook payloads.
    """

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    object: Literal["whatsapp_business_account"]
    entry: list[WebhookEntry]
