"""Per-type content models of inbound WhatsApp messages."""

from .contact import (
    ContactAddress,
    ContactEmail,
    ContactInfo,
    ContactName,
    ContactOrganization,
    ContactPhone,
    ContactUrl,
)
from .interactive import ButtonContent, ButtonReply, InteractiveContent, ListReply
from .location import LocationContent
from .media import MediaContent
from .text import TextContent

__all__ = [
    "ButtonContent",
    "ButtonReply",
    "ContactAddress",
    "ContactEmail",
    "ContactInfo",
    "ContactName",
    "ContactOrganization",
    "ContactPhone",
    "ContactUrl",
    "InteractiveContent",
    "ListReply",
    "LocationContent",
    "MediaContent",
    "TextContent",
]
