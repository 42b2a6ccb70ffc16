import logging
from typing import Dict, List, Optional

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from app.core.errors import UploadError
from .base import MediaHost, UploadResult

logger = logging.getLogger(__name__)


class CloudinaryMediaHost(MediaHost):
    """
    Cloudinary image host using the Cloudinary SDK uploader.

    - Uploads into a fixed folder.
    - Applies an incoming transformation: fit inside max_width x max_height
      (never upscaled), automatic quality and automatic format.
    - Returns secure_url and public_id from Cloudinary's response.
    """

    def __init__(
        self,
        cloud_name: Optional[str],
        api_key: Optional[str],
        api_secret: Optional[str],
        folder: str = "fixmystreet-reports",
        max_width: int = 800,
        max_height: int = 600,
        timeout: float = 30.0,
    ):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.folder = folder
        self.max_width = max_width
        self.max_height = max_height
        self.timeout = timeout

        if self.is_configured():
            cloudinary.config(
                cloud_name=cloud_name,
                api_key=api_key,
                api_secret=api_secret,
                secure=True,
            )

    def is_configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    @property
    def transformation(self) -> List[Dict[str, object]]:
        return [
            {"width": self.max_width, "height": self.max_height, "crop": "limit"},
            {"quality": "auto"},
            {"fetch_format": "auto"},
        ]

    def upload(self, image: str) -> UploadResult:
        logger.info(
            f"Cloudinary config: cloud_name={self.cloud_name}, "
            f"api_key={'Set' if self.api_key else 'Missing'}, "
            f"api_secret={'Set' if self.api_secret else 'Missing'}"
        )
        if not self.is_configured():
            raise UploadError("Upload failed", details="Cloudinary credentials are not configured")

        try:
            response = cloudinary.uploader.upload(
                image,
                folder=self.folder,
                transformation=self.transformation,
                timeout=self.timeout,
            )
        except CloudinaryError as e:
            logger.error(f"Cloudinary upload error: {e}")
            raise UploadError("Upload failed", details=str(e)) from e

        logger.info(f"Cloudinary upload successful: {response.get('secure_url')}")
        return UploadResult(url=response["secure_url"], public_id=response["public_id"])
