"""
Upload endpoint - hand a photo to the media host before a report is submitted.
"""

import asyncio
import logging

from fastapi import APIRouter, Depends

from app.models.base import UploadRequest, UploadResponse
from app.services.media import MediaHost, get_media_host
from app.services.upload_service import upload_image

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/upload", tags=["Upload"])


@router.post("", response_model=UploadResponse)
async def upload(body: UploadRequest, host: MediaHost = Depends(get_media_host)):
    """
    Upload an inline image (data URI or URL).

    Returns {"url", "publicId"}. Failures are answered by the UploadError
    handler: 400 for a missing image, 500 for host failures.
    """
    loop = asyncio.get_event_loop()
    result = await loop.run_in_executor(None, upload_image, host, body.image)
    return {"url": result.url, "publicId": result.public_id}
