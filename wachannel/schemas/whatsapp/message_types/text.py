"""WhatsApp text message content."""

from pydantic import BaseModel, ConfigDict, Field


class TextContent(BaseModel):
    """Text message content."""

    model_config = ConfigDict(extra="ignore")

    body: str = Field("", description="The text content of the message")
