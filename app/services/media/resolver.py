import logging

from app.core.settings import settings
from .base import MediaHost
from .cloudinary_provider import CloudinaryMediaHost
from .mock_provider import MockMediaHost

logger = logging.getLogger(__name__)


def get_media_host() -> MediaHost:
    """
    Resolve the media host from settings.

    Rules:
    - MEDIA_PROVIDER='mock' gives the offline host.
    - Anything else gives Cloudinary; missing credentials surface as an
      UploadError on the first upload, not here.
    """
    provider_name = (settings.MEDIA_PROVIDER or "cloudinary").lower()

    if provider_name == "mock":
        logger.info("Media host resolved: mock")
        return MockMediaHost(folder=settings.UPLOAD_FOLDER)

    return CloudinaryMediaHost(
        cloud_name=settings.CLOUDINARY_CLOUD_NAME,
        api_key=settings.CLOUDINARY_API_KEY,
        api_secret=settings.CLOUDINARY_API_SECRET,
        folder=settings.UPLOAD_FOLDER,
        max_width=settings.UPLOAD_MAX_WIDTH,
        max_height=settings.UPLOAD_MAX_HEIGHT,
        timeout=settings.UPLOAD_TIMEOUT_SECONDS,
    )
