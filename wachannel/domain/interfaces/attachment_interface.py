"""
Attachment storage and file-serving interface.

The adapter never stores media itself. Inbound media is downloaded from the
provider and handed to this collaborator, which returns the host Attachment;
outbound attachments are turned into public links by it.
"""

from abc import ABC, abstractmethod

from wachannel.domain.models.attachment import Attachment, AttachmentCreate


class IAttachmentService(ABC):
    """Persists attachments and exposes them through public URLs."""

    @abstractmethod
    async def store(self, file_data: bytes, attachment: AttachmentCreate) -> Attachment:
        """
        Store raw file data and return the persisted attachment.

        Args:
            file_data: Binary content downloaded from the provider
            attachment: Metadata (name, mime type, size, channel reference)

        Returns:
            The stored Attachment with its host identifier
        """
        pass

    @abstractmethod
    async def find_by_id(self, attachment_id: str) -> Attachment | None:
        """Look up a stored attachment."""
        pass

    @abstractmethod
    def get_public_url(self, attachment: Attachment) -> str:
        """Return a URL the provider can fetch the attachment from."""
        pass
