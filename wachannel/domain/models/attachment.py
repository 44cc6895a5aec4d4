"""Host attachment models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from wachannel.schemas.core.types import FileType


class AttachmentCreate(BaseModel):
    """Metadata handed to the attachment service when storing a file."""

    name: str
    type: str = Field(..., description="MIME type")
    size: int = Field(0, ge=0)
    channel: dict[str, Any] = Field(default_factory=dict)


class Attachment(AttachmentCreate):
    """A stored attachment, as owned by the host engine."""

    id: str
    location: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def file_type(self) -> FileType:
        return FileType.from_mime_type(self.type)
