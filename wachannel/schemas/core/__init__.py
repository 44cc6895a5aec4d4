"""Host-neutral schemas: enums, outgoing envelopes and normalized inbound messages."""

from .types import (
    FileType,
    IncomingMessageType,
    OutgoingMessageFormat,
    QuickReplyType,
    StdEventType,
)

__all__ = [
    "FileType",
    "IncomingMessageType",
    "OutgoingMessageFormat",
    "QuickReplyType",
    "StdEventType",
]
