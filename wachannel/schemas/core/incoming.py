"""
Normalized inbound message shapes handed to the host engine.

``get_payload()`` on an event wrapper returns one of the *Payload models (or a
postback id string), ``get_message()`` returns one of the StdIncoming* models.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from wachannel.schemas.core.types import FileType


class _IncomingModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class Coordinates(_IncomingModel):
    lat: float = 0
    lon: float = 0


class AttachmentIdRef(_IncomingModel):
    id: str


class IncomingAttachment(_IncomingModel):
    type: FileType
    payload: AttachmentIdRef


class LocationPayload(_IncomingModel):
    type: Literal["location"] = "location"
    coordinates: Coordinates = Field(default_factory=Coordinates)


class AttachmentPayload(_IncomingModel):
    type: Literal["attachments"] = "attachments"
    attachment: IncomingAttachment


Payload = LocationPayload | AttachmentPayload


class StdIncomingTextMessage(_IncomingModel):
    text: str


class StdIncomingPostbackMessage(_IncomingModel):
    postback: str
    text: str


class StdIncomingLocationMessage(LocationPayload):
    pass


class StdIncomingAttachmentMessage(AttachmentPayload):
    serialized_text: str


StdIncomingMessage = (
    StdIncomingTextMessage
    | StdIncomingPostbackMessage
    | StdIncomingLocationMessage
    | StdIncomingAttachmentMessage
)
