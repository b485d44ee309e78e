"""
SmartWiFi Portal - Configuration

All settings come from environment variables or a .env file (pydantic-settings).
"""
from functools import lru_cache
from typing import List
import os

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ==================== Application ====================
    APP_NAME: str = "SmartWiFi Portal"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # ==================== Database ====================
    DATABASE_URL: str = "sqlite:///~/smartwifi/data/smartwifi.db"

    @property
    def database_url_expanded(self) -> str:
        """Expand a leading ``~`` in sqlite paths."""
        url = self.DATABASE_URL
        if url.startswith("sqlite:///~"):
            path = url[10:]  # strip sqlite:///
            return f"sqlite:///{os.path.expanduser(path)}"
        return url

    @property
    def async_database_url(self) -> str:
        """Same database, addressed through the async driver."""
        return self.database_url_expanded.replace("sqlite:///", "sqlite+aiosqlite:///")

    # ==================== JWT auth ====================
    SECRET_KEY: str = "change_this_secret"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 12 * 60
    BCRYPT_ROUNDS: int = 12

    # ==================== Default admin ====================
    ADMIN_USER: str = "admin"
    ADMIN_PASS: str = "123"

    # ==================== Cards / install tokens ====================
    INSTALL_TOKEN_LENGTH: int = 10
    ISSUE_MAX_ATTEMPTS: int = 5
    PREVIEW_SIZE: int = 20
    SEARCH_DEFAULT_LIMIT: int = 100
    SEARCH_MAX_LIMIT: int = 200

    # ==================== CORS ====================
    CORS_ORIGINS: str = "*"

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse the CORS origin list."""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    # ==================== Logging ====================
    LOG_LEVEL: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    """Settings singleton."""
    return Settings()


settings = get_settings()
