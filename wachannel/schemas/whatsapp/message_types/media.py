"""
WhatsApp media message content.

Images, audio, video, documents and stickers all share the same reference
shape: a provider media id that must be resolved through the media endpoint
before the file can be downloaded.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MediaContent(BaseModel):
    """Media reference carried by image/audio/video/document/sticker messages."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    id: str = Field(..., description="Provider media ID")
    mime_type: str | None = Field(None, description="MIME type of the media")
    sha256: str | None = Field(None, description="SHA256 hash of the media file")
    caption: str | None = Field(None, description="Caption (image/video/document)")
    filename: str | None = Field(None, description="Original filename (document)")
    voice: bool | None = Field(None, description="Voice note flag (audio)")
    animated: bool | None = Field(None, description="Animated flag (sticker)")

    @field_validator("id")
    @classmethod
    def validate_media_id(cls, v: str) -> str:
        if not v:
            raise ValueError("Media ID cannot be empty")
        return v
