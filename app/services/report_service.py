"""
Report service - Business logic for citizen report handling.

DESIGN NOTE:
- Reports are written once and never updated or deleted here
- status is always "pending" at creation; createdAt comes from the store
- Identical submissions are stored as separate reports (no deduplication)
- Unknown payload fields are stored and returned untouched
"""

from firebase_admin import firestore
from numbers import Number
from pydantic import ValidationError
from typing import Any, Dict, List, Optional
import logging

from app.core.errors import PersistenceError, ReportValidationError
from app.models.report import ReportCreate, ReportResponse, ReportStatus
from app.services.report_store import ReportStore

logger = logging.getLogger(__name__)

# Fields owned by the store; a client cannot set them on create.
STORE_OWNED_FIELDS = ("id", "_id", "status", "createdAt")


def validate_report(report_data: ReportCreate) -> List[str]:
    """
    Check the required report fields.

    Returns a list of human-readable problems; an empty list means valid.
    """
    errors = []
    if not (report_data.name or "").strip():
        errors.append("name is required")
    if not (report_data.text or "").strip():
        errors.append("text is required")

    coords = report_data.coords
    if coords is None:
        errors.append("coords is required")
    elif len(coords) != 2 or not all(isinstance(c, Number) for c in coords):
        errors.append("coords must be [longitude, latitude]")
    return errors


def filter_reports(
    reports: List[ReportResponse],
    status: Optional[ReportStatus] = None,
    search: Optional[str] = None,
) -> List[ReportResponse]:
    """
    Narrow a listing by status and by a case-insensitive substring of text.
    Order is preserved.
    """
    if status is not None:
        reports = [r for r in reports if r.status == status.value]
    if search:
        needle = search.lower()
        reports = [r for r in reports if needle in (r.text or "").lower()]
    return reports


class ReportService:
    """
    Create and list operations over the report store.
    """

    def __init__(self, store: ReportStore, require_fields: bool = True):
        self.store = store
        self.require_fields = require_fields

    def create_report(self, report_data: ReportCreate) -> str:
        """
        Store a new report and return its id.

        Raises:
            ReportValidationError: required fields missing (only when require_fields)
            PersistenceError: the store rejected or could not take the write
        """
        if self.require_fields:
            errors = validate_report(report_data)
            if errors:
                logger.info(f"Rejected report submission: {errors}")
                raise ReportValidationError(errors)

        document: Dict[str, Any] = report_data.model_dump()
        for field in STORE_OWNED_FIELDS:
            document.pop(field, None)
        document["photo"] = report_data.photo or None
        document["status"] = ReportStatus.PENDING.value
        document["createdAt"] = firestore.SERVER_TIMESTAMP

        report_id = self.store.insert(document)
        logger.info(f"✅ Report saved: {report_id} (photo={'yes' if document['photo'] else 'no'})")
        return report_id

    def list_reports(
        self,
        status: Optional[ReportStatus] = None,
        search: Optional[str] = None,
    ) -> List[ReportResponse]:
        """
        Return all reports, newest first, optionally narrowed by status/search.

        Raises:
            PersistenceError: the store could not be read, or returned a
                document with wrongly typed report fields
        """
        reports = []
        for data in self.store.find_all():
            data["_id"] = data["id"]
            try:
                reports.append(ReportResponse(**data))
            except ValidationError as e:
                logger.error(f"Stored report {data['id']} does not match the report model: {e}")
                raise PersistenceError(f"malformed document {data['id']}") from e

        filtered = filter_reports(reports, status=status, search=search)
        logger.info(f"Fetched reports: {len(reports)} (returned {len(filtered)})")
        return filtered
