"""
Media hosting - turns an inline image into a publicly hosted URL.
"""

from app.services.media.base import MediaHost, UploadResult
from app.services.media.resolver import get_media_host

__all__ = ["MediaHost", "UploadResult", "get_media_host"]
