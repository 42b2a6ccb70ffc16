"""
Pydantic models for citizen reports.
These models handle the shape of report submission and listing.

Reports are schema-less documents: fields beyond the ones declared here are
accepted on submission and returned on listing unchanged.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, List
from enum import Enum


class ReportStatus(str, Enum):
    """
    Report workflow status.
    Every report is created as PENDING; nothing in this service moves it on.
    """
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"


class ReportCreate(BaseModel):
    """
    Model for creating a new report (incoming POST request).

    All fields are optional at the type level so that the required-field
    rules can be switched by REQUIRE_REPORT_FIELDS in the service layer.
    """
    name: Optional[str] = Field(None, description="Reporter name")
    email: Optional[str] = Field(None, description="Reporter email (optional)")
    text: Optional[str] = Field(None, description="What the citizen observed")
    coords: Optional[List[float]] = Field(None, description="[longitude, latitude]")
    photo: Optional[str] = Field(None, description="Hosted image URL from /api/upload")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Jane",
                "email": "jane@example.com",
                "text": "Pothole on Main St",
                "coords": [71.45, 51.17],
                "photo": "https://res.cloudinary.com/demo/image/upload/fixmystreet-reports/abc.jpg",
            }
        }
        extra = "allow"


class ReportResponse(BaseModel):
    """
    Model for report responses (what GET /api/data returns).

    The document id is exposed both as `id` and as `_id`; existing clients
    key their lists on `_id`.
    """
    id: str = Field(..., description="Firestore document ID")
    legacy_id: str = Field(..., alias="_id", description="Same value as id")
    name: Optional[str] = None
    email: Optional[str] = None
    text: Optional[str] = None
    coords: Optional[List[float]] = None
    photo: Optional[str] = None
    status: str = Field(default=ReportStatus.PENDING.value, description="pending, in-progress or resolved")
    createdAt: datetime = Field(..., description="When the store accepted the report")

    class Config:
        populate_by_name = True
        extra = "allow"
        json_schema_extra = {
            "example": {
                "id": "Zq3B0c7Hk1lRkD2s9xYp",
                "_id": "Zq3B0c7Hk1lRkD2s9xYp",
                "name": "Jane",
                "email": None,
                "text": "Pothole on Main St",
                "coords": [71.45, 51.17],
                "photo": None,
                "status": "pending",
                "createdAt": "2024-01-15T10:30:00Z",
            }
        }
