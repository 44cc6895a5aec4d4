"""
WhatsApp contact message content.

Contact cards shared by a customer: names, phones, emails, addresses,
organization and URLs.
"""

from pydantic import BaseModel, ConfigDict, Field


class ContactAddress(BaseModel):
    """Contact address information."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    country: str | None = None
    country_code: str | None = None
    type: str | None = Field(None, description="Address type (e.g., 'HOME', 'WORK')")

    def to_line(self) -> str:
        parts = [self.street, self.city, self.state, self.zip, self.country]
        return ", ".join(p for p in parts if p)


class ContactEmail(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    email: str
    type: str | None = None


class ContactName(BaseModel):
    """Contact name information."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    formatted_name: str = Field(..., description="Full formatted name")
    first_name: str | None = None
    last_name: str | None = None
    middle_name: str | None = None
    suffix: str | None = None
    prefix: str | None = None


class ContactOrganization(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    company: str | None = None
    department: str | None = None
    title: str | None = None


class ContactPhone(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    phone: str
    wa_id: str | None = Field(None, description="WhatsApp ID (if contact uses WhatsApp)")
    type: str | None = None


class ContactUrl(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    url: str
    type: str | None = None


class ContactInfo(BaseModel):
    """Individual contact card."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: ContactName
    addresses: list[ContactAddress] | None = None
    birthday: str | None = None
    emails: list[ContactEmail] | None = None
    org: ContactOrganization | None = None
    phones: list[ContactPhone] | None = None
    urls: list[ContactUrl] | None = None
