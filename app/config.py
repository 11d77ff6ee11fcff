# ============================================================================
# FILE: app/config.py
# ============================================================================
from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    """Application configuration using Pydantic BaseSettings"""

    # App settings
    APP_NAME: str = "Music Social API"
    DEBUG: bool = False
    API_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./music_social.db"  # Change to PostgreSQL in production

    # Redis cache
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_EXPIRE_SECONDS: int = 3600
    SEARCH_CACHE_SECONDS: int = 60

    # Security
    SECRET_KEY: str = "your-secret-key-change-this-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Uploaded audio and cover images
    UPLOAD_DIR: str = "./uploads"

    # Pagination
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    DEFAULT_PROFILE_PICTURE: str = "default-profile.jpg"

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
