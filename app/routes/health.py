"""
Health check endpoints.
Used for monitoring, deployment readiness checks, and basic connectivity tests.
"""

from fastapi import APIRouter, HTTPException, Request
from app.config.firebase import get_db
from app.core.errors import PersistenceError
from app.core.settings import settings
from app.services.report_store import ReportStore
from datetime import datetime, timezone


router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
async def health_check():
    """
    Basic health check endpoint.
    Returns 200 if service is running.
    """
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@router.get("/db")
async def database_health(request: Request):
    """
    Database connectivity check.
    Lists collections to verify the store answers.
    """
    try:
        db = get_db(request)
        collections_count = ReportStore(db, timeout=settings.FIRESTORE_TIMEOUT_SECONDS).ping()
    except PersistenceError as e:
        raise HTTPException(
            status_code=503,
            detail=f"Database connection failed: {str(e)}"
        )

    return {
        "status": "healthy",
        "database": "mock" if settings.USE_MOCK_DB else "firestore",
        "connected": True,
        "collections_count": collections_count,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
