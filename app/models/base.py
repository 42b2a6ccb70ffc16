"""
Pydantic models for the acknowledgement and error bodies shared by routes.
"""

from pydantic import BaseModel
from typing import Optional


class MessageResponse(BaseModel):
    """Acknowledgement body of the reports API: {"message": "Success" | "Error"}."""
    message: str


class UploadRequest(BaseModel):
    """Inline image to upload: a base64 data URI or a remote image URL."""
    image: Optional[str] = None


class UploadResponse(BaseModel):
    url: str
    publicId: str


class UploadErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
