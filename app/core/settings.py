"""
Core settings and environment variables for the FixMyStreet reports API.
Uses pydantic-settings for type-safe environment variable loading.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Create a .env file in the root directory to configure these.
    """

    # Application
    APP_NAME: str = "FixMyStreet Reports API"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS - Frontend URLs allowed to access this API
    CORS_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000"

    # Firebase/Firestore
    FIREBASE_PROJECT_ID: Optional[str] = None
    FIREBASE_CREDENTIALS_PATH: Optional[str] = None  # Path to service account JSON
    REPORTS_COLLECTION: str = "submissions"
    FIRESTORE_TIMEOUT_SECONDS: float = 30.0

    # Mock DB mode for local development without Firebase credentials.
    # An empty MOCK_DB_PATH keeps the mock database in memory only.
    USE_MOCK_DB: bool = False
    MOCK_DB_PATH: Optional[str] = "./mock_db.json"

    # Reject reports with blank name/text or malformed coords.
    # Set to false to accept any well-formed payload as-is.
    REQUIRE_REPORT_FIELDS: bool = True

    # Media host: "cloudinary" (default) or "mock" (no network, local dev only)
    MEDIA_PROVIDER: str = "cloudinary"
    CLOUDINARY_CLOUD_NAME: Optional[str] = None
    CLOUDINARY_API_KEY: Optional[str] = None
    CLOUDINARY_API_SECRET: Optional[str] = None
    UPLOAD_FOLDER: str = "fixmystreet-reports"
    UPLOAD_MAX_WIDTH: int = 800
    UPLOAD_MAX_HEIGHT: int = 600
    UPLOAD_TIMEOUT_SECONDS: float = 30.0

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"

    @property
    def cors_origins_list(self) -> list:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


# Global settings instance
settings = Settings()
