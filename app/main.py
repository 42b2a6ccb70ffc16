"""
FixMyStreet Reports API - FastAPI Application Entry Point

Citizens submit geotagged issue reports (name, text, photo, coordinates);
anyone can list them, newest first.

DESIGN PRINCIPLES:
- One document collection, insert and read only
- Photos live on the media host; reports only keep the URL
- Every failure reaches the client as a small JSON body, details stay in logs
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config.firebase import initialize_firestore
from app.core.errors import PersistenceError, ReportValidationError, UploadError
from app.core.settings import settings
from app.routes import health, reports, upload

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


# Initialize FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Citizen issue reports: submit, list, and upload photos",
    debug=settings.DEBUG
)
app.state.db = None


@app.exception_handler(PersistenceError)
async def persistence_exception_handler(request: Request, exc: PersistenceError):
    """Store failures: generic body for the client, cause in the log."""
    logger.error(f"{request.method} {request.url.path} error: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Error"}
    )


@app.exception_handler(ReportValidationError)
async def report_validation_exception_handler(request: Request, exc: ReportValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Error", "errors": exc.errors}
    )


@app.exception_handler(UploadError)
async def upload_exception_handler(request: Request, exc: UploadError):
    content = {"error": exc.message}
    if exc.details:
        content["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=content)


# Global exception handler: anything not mapped above
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Unexpected failures get the generic error body; the traceback goes to the log."""
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Error"}
    )


# Pydantic validation error handler
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Malformed or wrongly typed request bodies and query parameters.

    Upload clients read {"error", "details"}, so /api/upload answers 400 in
    that shape; the reports API answers 422 with {"message": "Error"}.
    """
    logger.warning(f"Validation error on {request.method} {request.url.path}: {exc.errors()}")
    if request.url.path.rstrip("/") == upload.router.prefix:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request", "details": details}
        )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"message": "Error", "detail": jsonable_encoder(exc.errors())}
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Application lifecycle events
@app.on_event("startup")
async def startup_event():
    """
    Create the store client once; every request reuses it.
    """
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    try:
        app.state.db = initialize_firestore(settings)
    except Exception as e:
        logger.warning(f"Firestore initialization failed: {e}")
        logger.warning("The app will start but report operations will answer 500.")
        app.state.db = None


@app.on_event("shutdown")
async def shutdown_event():
    logger.info(f"Shutting down {settings.APP_NAME}")
    app.state.db = None


# Include routers
app.include_router(health.router)
app.include_router(reports.router)
app.include_router(upload.router)


# Root endpoint
@app.get("/")
async def root():
    """
    Root endpoint - API information.
    """
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "health": "/health",
        "reports": "/api/data",
        "upload": "/api/upload"
    }
