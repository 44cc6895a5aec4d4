"""
Host-side data types and enums shared by the inbound and outbound paths.

These mirror the chatbot engine's vocabulary; nothing here is WhatsApp specific.
"""

from enum import Enum


class StdEventType(str, Enum):
    """Normalized event types emitted on the host bus."""

    MESSAGE = "message"
    DELIVERY = "delivery"
    READ = "read"
    UNKNOWN = "unknown"


class IncomingMessageType(str, Enum):
    """Sub-classification of inbound message events."""

    MESSAGE = "message"  # plain text
    ATTACHMENT = "attachment"
    POSTBACK = "postback"
    LOCATION = "location"
    UNKNOWN = "unknown"


class OutgoingMessageFormat(str, Enum):
    """Formats of outbound envelopes the host can ask the channel to send."""

    TEXT = "text"
    QUICK_REPLIES = "quickReplies"
    BUTTONS = "buttons"
    LIST = "list"
    CAROUSEL = "carousel"
    ATTACHMENT = "attachment"


class FileType(str, Enum):
    """Host attachment kinds."""

    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    FILE = "file"
    UNKNOWN = "unknown"

    @classmethod
    def from_mime_type(cls, mime_type: str | None) -> "FileType":
        """Infer the attachment kind from a MIME type."""
        if not mime_type:
            return cls.UNKNOWN
        major = mime_type.split("/", 1)[0].lower()
        if major in ("image", "video", "audio"):
            return cls(major)
        return cls.FILE


class QuickReplyType(str, Enum):
    TEXT = "text"
    LOCATION = "location"
    USER_PHONE_NUMBER = "user_phone_number"
    USER_EMAIL = "user_email"
