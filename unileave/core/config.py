"""
UniLeave Application Configuration
Loads settings from .env file using Pydantic v2 with BaseSettings
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # ==================== Project Info ====================
    PROJECT_NAME: str = "UniLeave API"
    PROJECT_DESCRIPTION: str = "University Staff Leave Management - requests, approvals, balances and reports"
    VERSION: str = "1.0.0"

    # ==================== Database ====================
    DATABASE_URL: str = "sqlite:///unileave.db"
    DATABASE_POOL_SIZE: int = 5
    DATABASE_MAX_OVERFLOW: int = 10
    DATABASE_POOL_RECYCLE: int = 3600

    # ==================== Security & Authentication ====================
    SECRET_KEY: str = "change-this-secret-key-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 8
    DEFAULT_ADMIN_PASSWORD: str = "admin123"

    # ==================== CORS & Frontend ====================
    FRONTEND_URL: str = "http://localhost:5173"
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:8080",
        "http://127.0.0.1:5173",
    ]

    # ==================== Server Configuration ====================
    HOST: str = "0.0.0.0"
    PORT: int = 4000

    # ==================== Institution Defaults ====================
    INSTITUTION_NAME: str = "Federal University, Lafia"
    SYSTEM_EMAIL: str = "hr@fulafia.edu.ng"

    # ==================== Features ====================
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    SEED_DEMO_DATA: bool = False

    # ==================== Configuration Loading ====================
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="allow",
    )

    # ==================== Properties ====================
    @property
    def is_sqlite(self) -> bool:
        """Check if the configured store is SQLite"""
        return self.DATABASE_URL.lower().startswith("sqlite")


# ==================== Settings Singleton ====================
@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
