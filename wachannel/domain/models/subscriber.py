"""Host subscriber model built from WhatsApp contact profiles."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


class SubscriberChannel(BaseModel):
    name: str


class SubscriberCreate(BaseModel):
    """Subscriber record the host creates on first contact."""

    foreign_id: str
    first_name: str = ""
    last_name: str = ""
    gender: str = "unknown"
    channel: SubscriberChannel
    locale: str | None = None
    language: str = "en"
    timezone: int = 0
    country: str = ""
    labels: list[str] = Field(default_factory=list)
    assigned_to: str | None = None
    assigned_at: datetime | None = None
    last_visit: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    retained_from: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
