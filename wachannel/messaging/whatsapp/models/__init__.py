"""Outbound WhatsApp wire models."""

from typing import Annotated

from pydantic import Field

from .basic_models import (
    ReactionBody,
    ReactionMessage,
    ReplyContext,
    SendMessageResult,
    TextBody,
    TextMessage,
    WireMessageBase,
)
from .interactive_models import (
    LIST_ROW_DESCRIPTION_LIMIT,
    Interactive,
    InteractiveAction,
    InteractiveHeader,
    InteractiveMessage,
    InteractiveText,
    InteractiveType,
    ListRow,
    ListSection,
    ReplyButton,
    ReplyButtonReply,
)
from .media_models import MediaMessage, MediaObject, MediaType
from .specialized_models import ContactsMessage, LocationBody, LocationMessage
from .template_models import (
    Template,
    TemplateComponent,
    TemplateLanguage,
    TemplateMessage,
)

WireMessage = Annotated[
    TextMessage
    | ReactionMessage
    | MediaMessage
    | InteractiveMessage
    | TemplateMessage
    | ContactsMessage
    | LocationMessage,
    Field(discriminator="type"),
]

__all__ = [
    "LIST_ROW_DESCRIPTION_LIMIT",
    "ContactsMessage",
    "Interactive",
    "InteractiveAction",
    "InteractiveHeader",
    "InteractiveMessage",
    "InteractiveText",
    "InteractiveType",
    "ListRow",
    "ListSection",
    "LocationBody",
    "LocationMessage",
    "MediaMessage",
    "MediaObject",
    "MediaType",
    "ReactionBody",
    "ReactionMessage",
    "ReplyButton",
    "ReplyButtonReply",
    "ReplyContext",
    "SendMessageResult",
    "Template",
    "TemplateComponent",
    "TemplateLanguage",
    "TemplateMessage",
    "TextBody",
    "TextMessage",
    "WireMessage",
    "WireMessageBase",
]
