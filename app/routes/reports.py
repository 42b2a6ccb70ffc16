"""
Report endpoints - API routes for citizen report submission and retrieval.

Bodies follow the existing client contract:
- POST success: {"message": "Success"}
- any store failure: {"message": "Error"} with status 500 (see app.main)
"""

import asyncio
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.config.firebase import get_db
from app.core.settings import settings
from app.models.base import MessageResponse
from app.models.report import ReportCreate, ReportResponse, ReportStatus
from app.services.report_service import ReportService
from app.services.report_store import ReportStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/data", tags=["Reports"])


def get_report_service(db=Depends(get_db)) -> ReportService:
    store = ReportStore(
        db,
        collection=settings.REPORTS_COLLECTION,
        timeout=settings.FIRESTORE_TIMEOUT_SECONDS,
    )
    return ReportService(store, require_fields=settings.REQUIRE_REPORT_FIELDS)


@router.post("", response_model=MessageResponse)
async def submit_report(report: ReportCreate, service: ReportService = Depends(get_report_service)):
    """
    Submit a new citizen report.

    Stores one document with status "pending" and a server timestamp.
    Identical submissions create separate reports.
    """
    logger.info(f"📝 POST /api/data - name={report.name!r}, has_photo={bool(report.photo)}")

    # Firestore calls block; keep them off the event loop
    loop = asyncio.get_event_loop()
    await loop.run_in_executor(None, service.create_report, report)
    return {"message": "Success"}


@router.get("", response_model=List[ReportResponse])
async def get_reports(
    status: Optional[ReportStatus] = Query(None, description="Only reports with this status"),
    q: Optional[str] = Query(None, description="Case-insensitive text search"),
    service: ReportService = Depends(get_report_service),
):
    """
    List every report, newest first.

    Without parameters the full collection is returned. status and q narrow
    the result after it is read.
    """
    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(None, service.list_reports, status, q)
