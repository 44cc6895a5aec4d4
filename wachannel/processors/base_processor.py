"""
Base event wrapper abstraction.

An event wrapper adapts exactly one inbound unit (a message or a status) to
the host engine's event interface. Platform wrappers classify the unit once,
at construction, and expose read-only accessors afterwards.
"""

from abc import ABC, abstractmethod
from typing import Any

from wachannel.core.logging.logger import get_logger
from wachannel.domain.models.attachment import Attachment
from wachannel.schemas.core.incoming import Payload, StdIncomingMessage
from wachannel.schemas.core.types import IncomingMessageType, StdEventType


class InvalidEventError(Exception):
    """An accessor was called on an event of the wrong kind."""


class MissingAttachmentError(Exception):
    """Payload of a media message requested before its attachment was resolved."""

    def __init__(self, message_id: str):
        self.message_id = message_id
        super().__init__(
            f"Attachment of message {message_id} has not been resolved yet"
        )


class BaseEventWrapper(ABC):
    """
    Platform-agnostic event wrapper.

    Subclasses classify their unit in ``__init__`` and must not change the
    classification afterwards.
    """

    def __init__(self, channel_name: str):
        self.logger = get_logger(__name__)
        self._channel_name = channel_name

    @property
    def channel_name(self) -> str:
        return self._channel_name

    def get_channel_data(self) -> dict[str, Any]:
        """Channel reference stored with subscribers and messages."""
        return {"name": self._channel_name}

    @abstractmethod
    def get_id(self) -> str:
        """Provider id of the message or status."""
        pass

    @abstractmethod
    def get_event_type(self) -> StdEventType:
        pass

    @abstractmethod
    def get_message_type(self) -> IncomingMessageType | None:
        """Sub-classification of message events; None for non-message events."""
        pass

    @abstractmethod
    def get_payload(self) -> Payload | str | None:
        pass

    @abstractmethod
    def get_message(self) -> StdIncomingMessage:
        pass

    @abstractmethod
    def get_sender_foreign_id(self) -> str | None:
        pass

    @abstractmethod
    def get_recipient_foreign_id(self) -> str | None:
        pass

    @abstractmethod
    def get_delivered_messages(self) -> list[str]:
        pass

    @abstractmethod
    def get_watermark(self) -> int:
        pass

    @abstractmethod
    def get_attachments(self) -> list[Attachment]:
        pass

    def is_message(self) -> bool:
        return self.get_event_type() == StdEventType.MESSAGE

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(id={self.get_id()!r}, "
            f"event_type={self.get_event_type().value!r})"
        )
