"""
Upload gateway - forwards a client image to the media host.

Stateless: the returned URL is only persisted if the client later sends it
as the photo of a report.
"""

from typing import Optional
import logging

from app.core.errors import UploadError
from app.services.media import MediaHost, UploadResult

logger = logging.getLogger(__name__)


def upload_image(host: MediaHost, image: Optional[str]) -> UploadResult:
    """
    Upload an inline image and return its hosted URL and id.

    Raises:
        UploadError: 400 when no image was given, 500 when the host failed
    """
    if not image:
        raise UploadError("No image provided", status_code=400)

    logger.info("Attempting image upload...")
    try:
        return host.upload(image)
    except UploadError:
        raise
    except Exception as e:
        logger.error(f"Image upload error: {e}", exc_info=True)
        raise UploadError("Upload failed", details=str(e)) from e
