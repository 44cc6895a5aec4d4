"""
Base models for WhatsApp Business Platform webhooks.

Common Pydantic models shared by messages and statuses: metadata, contact
profiles, message context, conversation/pricing detail and errors. Unknown
keys are ignored so that new provider fields never reject a notification.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WhatsAppMetadata(BaseModel):
    """
    Business phone number metadata from WhatsApp webhooks.

    Present in every change value to identify the business phone number that
    received or sent the message.
    """

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    display_phone_number: str = Field(
        ..., description="Business display phone number (formatted for display)"
    )
    phone_number_id: str = Field(
        ..., description="Business phone number ID (WhatsApp internal identifier)"
    )

    @field_validator("phone_number_id")
    @classmethod
    def validate_phone_number_id(cls, v: str) -> str:
        if not v:
            raise ValueError("Phone number ID cannot be empty")
        return v


class ContactProfile(BaseModel):
    """User profile information from a WhatsApp contact."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: str = Field("", description="WhatsApp user's display name")


class WhatsAppContact(BaseModel):
    """Contact record identifying the sender of incoming messages."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    wa_id: str = Field(..., description="WhatsApp user ID / phone number")
    profile: ContactProfile = Field(default_factory=ContactProfile)

    def split_name(self) -> tuple[str, str]:
        """Split the profile name into (first name, rest)."""
        first, _, rest = self.profile.name.partition(" ")
        return first, rest.strip()


class MessageContext(BaseModel):
    """Context for replies, forwards and product references."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    from_: str | None = Field(None, alias="from")
    id: str | None = None
    forwarded: bool | None = None
    frequently_forwarded: bool | None = None
    referred_product: dict[str, Any] | None = None


class ConversationOrigin(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str = Field(..., description="Conversation category")


class Conversation(BaseModel):
    """Conversation information attached to a status."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    id: str
    expiration_timestamp: str | None = None
    origin: ConversationOrigin | None = None


class Pricing(BaseModel):
    """Pricing information attached to a status."""

    model_config = ConfigDict(extra="ignore")

    billable: bool | None = None
    pricing_model: str | None = None
    category: str | None = None


class ErrorData(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    details: str = ""


class MessageError(BaseModel):
    """Error information for failed messages or system-level errors."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    code: int
    title: str = ""
    message: str = ""
    error_data: ErrorData | None = None
    href: str | None = None
