from .message_factory import (
    TranslationContext,
    UnsupportedAttachmentTypeError,
    UnsupportedFormatError,
    WhatsAppMessageFactory,
    translate,
    truncate,
)

__all__ = [
    "TranslationContext",
    "UnsupportedAttachmentTypeError",
    "UnsupportedFormatError",
    "WhatsAppMessageFactory",
    "translate",
    "truncate",
]
