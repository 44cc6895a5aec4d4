"""
Outbound media message models.

A media message carries one media object under the key named after its kind,
referenced either by a public ``link`` or a previously uploaded media ``id``.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, model_validator

from wachannel.messaging.whatsapp.models.basic_models import WireMessageBase


class MediaType(str, Enum):
    """Media kinds accepted by the send-message endpoint."""

    AUDIO = "audio"
    DOCUMENT = "document"
    IMAGE = "image"
    STICKER = "sticker"
    VIDEO = "video"


class MediaObject(BaseModel):
    model_config = ConfigDict(frozen=True)

    link: str | None = None
    id: str | None = None
    caption: str | None = None
    filename: str | None = None

    @model_validator(mode="after")
    def validate_reference(self):
        if not (self.link or self.id):
            raise ValueError("Media object needs either 'link' or 'id'")
        return self


class MediaMessage(WireMessageBase):
    type: Literal["image", "audio", "video", "document", "sticker"]
    image: MediaObject | None = None
    audio: MediaObject | None = None
    video: MediaObject | None = None
    document: MediaObject | None = None
    sticker: MediaObject | None = None

    @model_validator(mode="after")
    def validate_media_field(self):
        populated = [
            kind.value for kind in MediaType if getattr(self, kind.value) is not None
        ]
        if populated != [self.type]:
            raise ValueError(
                f"Media message of type '{self.type}' must carry exactly one "
                f"'{self.type}' object, found {populated or 'none'}"
            )
        return self

    @classmethod
    def build(cls, kind: MediaType, media: MediaObject) -> "MediaMessage":
        return cls(type=kind.value, **{kind.value: media})

    @property
    def media(self) -> MediaObject:
        return getattr(self, self.type)
