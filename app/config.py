"""
Application configuration using Pydantic Settings.

Centralizes all environment variables and app settings.
Credentials (Firebase project, Mongo URL) have no embedded fallback secret;
they must be injected through the environment or a .env file.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

FIREBASE_JWKS_URL = (
    "https://www.googleapis.com/service_accounts/v1/jwk/"
    "securetoken@system.gserviceaccount.com"
)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    All sensitive/configurable values should live here.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Boibritto API"
    environment: str = "production"
    log_level: str = "INFO"

    # MongoDB - Motor (async driver) connection string
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_database: str = "boibritto"
    mongodb_timeout_ms: int = 5000

    # Firebase ID token validation
    firebase_project_id: Optional[str] = None
    firebase_jwks_url: str = FIREBASE_JWKS_URL
    firebase_auth_emulator_host: Optional[str] = None
    token_verify_timeout_seconds: int = 5

    # CORS
    frontend_url: Optional[str] = None
    cors_origins: List[str] = ["http://localhost:5173", "http://localhost:8000"]

    @field_validator("firebase_project_id", "firebase_auth_emulator_host", "frontend_url", mode="before")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not isinstance(v, str):
            return v
        return v.strip() or None

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    @property
    def allowed_origins(self) -> List[str]:
        origins = list(self.cors_origins)
        if self.frontend_url:
            origins.insert(0, self.frontend_url)
        return origins


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings instance.
    Using lru_cache avoids re-reading .env on every request.
    """
    return Settings()
