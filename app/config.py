"""Application configuration settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
import json


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # Database
    MONGODB_URL: str = "mongodb://localhost:27017"
    DATABASE_NAME: str = "clinic_emr"
    
    # Application
    APP_NAME: str = "Clinic EMR API"
    API_V1_PREFIX: str = "/api/v1"
    PORT: int = 8000
    
    # JWT
    JWT_SECRET_KEY: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 12
    
    # CORS - frontends allowed to call the API
    BACKEND_CORS_ORIGINS: str = '["http://localhost:3000", "http://localhost:5173"]'
    
    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    
    # Logging
    LOG_LEVEL: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    
    # Visit drafts
    DRAFT_AUTOSAVE_INTERVAL_SECONDS: float = 30.0
    DRAFT_MAX_AGE_HOURS: float = 24.0
    
    # Patient communication
    TEMPLATE_SUGGESTION_WINDOW_DAYS: int = 7
    MAX_TEMPLATE_SUGGESTIONS: int = 3
    DEFAULT_ORGANIZATION_NAME: str = "Our Healthcare Team"
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )
    
    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS origins from JSON string."""
        try:
            return json.loads(self.BACKEND_CORS_ORIGINS)
        except ValueError:
            return ["http://localhost:3000"]


settings = Settings()
