# app/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Every value has a local-development default, so the API runs
    without a .env file.

    Optional:
      - GEMINI_API_KEY (recipe suggestions are disabled without it)
      - ADMIN_EMAIL / ADMIN_PASSWORD (demo administrator login)
    """

    PROJECT_NAME: str = "Orgânico Vida API"
    API_V1_STR: str = "/api/v1"

    # Record store (one table of JSON blobs)
    DATABASE_URL: str = "sqlite:///./organico.db"

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]

    # Demo administrator shortcut (bypasses the users collection)
    ADMIN_EMAIL: str = "admin@organico.com"
    ADMIN_PASSWORD: str = "admin"

    # Recipe suggestions (Gemini REST API)
    GEMINI_API_KEY: str | None = None
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_API_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_TIMEOUT_SECONDS: float = 30.0

    # PIX payment code
    PIX_MERCHANT_NAME: str = "ORGANICOVIDA"
    PIX_MERCHANT_CITY: str = "BRASILIA"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
