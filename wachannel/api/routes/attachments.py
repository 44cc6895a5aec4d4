"""
Attachment file serving.

Outgoing media is sent to WhatsApp as a link; this route is what those links
point to when the in-memory attachment service is in use.
"""

from fastapi import APIRouter, Depends, HTTPException
from starlette.responses import Response

from wachannel.api.dependencies import get_attachment_service
from wachannel.persistence.memory import ATTACHMENTS_PATH, InMemoryAttachmentService

router = APIRouter(prefix=ATTACHMENTS_PATH, tags=["Attachments"])


@router.get("/{attachment_id}")
async def download_attachment(
    attachment_id: str,
    service: InMemoryAttachmentService = Depends(get_attachment_service),
) -> Response:
    attachment = await service.find_by_id(attachment_id)
    content = await service.read(attachment_id)
    if attachment is None or content is None:
        raise HTTPException(status_code=404, detail="Attachment not found")

    return Response(
        content=content,
        media_type=attachment.type,
        headers={"Content-Disposition": f'inline; filename="{attachment.name}"'},
    )
