"""WhatsApp location message content."""

from pydantic import BaseModel, ConfigDict, Field


class LocationContent(BaseModel):
    """
    Location message content.

    Coordinates are optional on the wire; consumers default missing ones to 0.
    """

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    latitude: float | None = Field(None, ge=-90.0, le=90.0)
    longitude: float | None = Field(None, ge=-180.0, le=180.0)
    name: str | None = None
    address: str | None = None
    url: str | None = None
