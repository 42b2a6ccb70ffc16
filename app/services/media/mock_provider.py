import hashlib
import logging

from .base import MediaHost, UploadResult

logger = logging.getLogger(__name__)


class MockMediaHost(MediaHost):
    """
    Offline media host for local development.

    No network call: the image itself comes back as the URL (a data URI
    renders fine in an <img> tag) and the public id is derived from its hash.
    """

    def __init__(self, folder: str = "fixmystreet-reports"):
        self.folder = folder

    def upload(self, image: str) -> UploadResult:
        digest = hashlib.sha1(image.encode("utf-8")).hexdigest()[:20]
        public_id = f"{self.folder}/{digest}"
        logger.info(f"Mock upload stored as {public_id}")
        return UploadResult(url=image, public_id=public_id)
