"""Outbound contact card and location message models."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from wachannel.messaging.whatsapp.models.basic_models import WireMessageBase
from wachannel.schemas.whatsapp.message_types.contact import ContactInfo


class ContactsMessage(WireMessageBase):
    type: Literal["contacts"] = "contacts"
    contacts: list[ContactInfo] = Field(..., min_length=1)


class LocationBody(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    name: str | None = None
    address: str | None = None


class LocationMessage(WireMessageBase):
    type: Literal["location"] = "location"
    location: LocationBody
