"""
Tests for the in-memory attachment service.
"""

import pytest

from wachannel.domain.models.attachment import AttachmentCreate
from wachannel.persistence.memory import InMemoryAttachmentService


@pytest.mark.asyncio
async def test_store_and_read():
    service = InMemoryAttachmentService(public_url="https://files.example.com/")

    stored = await service.store(
        b"abc", AttachmentCreate(name="a.txt", type="text/plain", size=3)
    )

    assert stored.location == f"/attachments/{stored.id}"
    assert await service.find_by_id(stored.id) == stored
    assert await service.read(stored.id) == b"abc"
    assert service.get_public_url(stored) == f"https://files.example.com/attachments/{stored.id}"
    assert len(service) == 1


@pytest.mark.asyncio
async def test_ids_are_unique():
    service = InMemoryAttachmentService(public_url="http://localhost")
    meta = AttachmentCreate(name="x", type="image/png")

    first = await service.store(b"1", meta)
    second = await service.store(b"2", meta)

    assert first.id != second.id
    assert await service.read(first.id) == b"1"


@pytest.mark.asyncio
async def test_unknown_id():
    service = InMemoryAttachmentService(public_url="http://localhost")

    assert await service.find_by_id("missing") is None
    assert await service.read("missing") is None
