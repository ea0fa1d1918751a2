# ============================================================================
# FILE: habithub/config.py
# ============================================================================
from functools import lru_cache
from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    """Application configuration shared by the auth, media and upload apps"""

    # App settings
    APP_NAME: str = "HabitHub"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database (one store shared by all three services)
    DATABASE_URL: str = "sqlite:///./habithub.db"

    # Security
    JWT_SECRET: str = ""
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: Optional[int] = None

    # Upload service
    UPLOAD_SERVER: str = "http://localhost:3002/api/v1"
    UPLOAD_URL: str = "http://localhost:3002/uploads/"
    UPLOAD_DIR: str = "./uploads"
    UPLOAD_TIMEOUT_SECONDS: float = 5.0
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        env_file = ".env"
        case_sensitive = True

@lru_cache
def get_settings() -> Settings:
    """Read the environment once; tests clear the cache to re-read it"""
    return Settings()
