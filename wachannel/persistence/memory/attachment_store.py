"""
In-memory attachment service.

Keeps downloaded media in process memory and serves it back under
``<public_url>/attachments/<id>``. Suitable for development, testing and
single-process deployments; a host engine normally plugs in its own storage.
"""

import asyncio
import uuid

from wachannel.core.config.settings import settings
from wachannel.core.logging.logger import get_logger
from wachannel.domain.interfaces.attachment_interface import IAttachmentService
from wachannel.domain.models.attachment import Attachment, AttachmentCreate

ATTACHMENTS_PATH = "/attachments"

logger = get_logger(__name__)


class InMemoryAttachmentService(IAttachmentService):
    """Attachment storage backed by a process-local dict."""

    def __init__(self, public_url: str | None = None):
        self.public_url = (public_url or settings.public_url).rstrip("/")
        self._attachments: dict[str, Attachment] = {}
        self._contents: dict[str, bytes] = {}
        self._lock = asyncio.Lock()

    async def store(self, file_data: bytes, attachment: AttachmentCreate) -> Attachment:
        attachment_id = uuid.uuid4().hex
        stored = Attachment(
            id=attachment_id,
            location=f"{ATTACHMENTS_PATH}/{attachment_id}",
            **attachment.model_dump(),
        )
        async with self._lock:
            self._attachments[attachment_id] = stored
            self._contents[attachment_id] = file_data

        logger.debug(f"Stored attachment {attachment_id} ({stored.type}, {stored.size} bytes)")
        return stored

    async def find_by_id(self, attachment_id: str) -> Attachment | None:
        return self._attachments.get(attachment_id)

    async def read(self, attachment_id: str) -> bytes | None:
        """Raw content of a stored attachment."""
        return self._contents.get(attachment_id)

    def get_public_url(self, attachment: Attachment) -> str:
        return f"{self.public_url}{ATTACHMENTS_PATH}/{attachment.id}"

    def __len__(self) -> int:
        return len(self._attachments)
