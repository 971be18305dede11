# ============================================================================
# FILE: listenqueue/config.py
# ============================================================================
from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    """Application configuration using Pydantic BaseSettings"""

    # App settings
    APP_NAME: str = "Listening Queue API"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./listenqueue.db"  # Change to PostgreSQL in production

    # Redis (cache, booth keys and the message bus)
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_EXPIRE_SECONDS: int = 3600
    MESSAGE_CHANNEL: str = "v1"

    # Security
    SECRET_KEY: str = "your-secret-key-change-this-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 14
    SESSION_COOKIE_NAME: str = "uwsession"

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Media sources
    YOUTUBE_API_KEY: str = ""
    YOUTUBE_API_SERVICE_NAME: str = "youtube"
    YOUTUBE_API_VERSION: str = "v3"
    SOUNDCLOUD_CLIENT_ID: str = ""
    SOUNDCLOUD_API_URL: str = "https://api.soundcloud.com"
    SEARCH_RESULTS: int = 25

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
