"""Application configuration loaded from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict

# Value shipped in the sample .env; treated the same as an empty key.
PLACEHOLDER_API_KEY = "YOUR_GEMINI_API_KEY"


class Settings(BaseSettings):
    """Application settings with environment variable loading and sensible defaults."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    app_name: str = "kisanmitra-functions"
    debug: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8080

    # Firebase project backing auth, Firestore and Storage
    firebase_project: str = ""
    storage_bucket: str = ""

    gemini_api_key: str = ""
    gemini_model: str = "gemini-1.5-flash"

    cors_origins: str = "http://localhost:3000,http://localhost:5173"
    cors_origin_regex: str = r"^https://.*\.(web\.app|firebaseapp\.com)$"

    synthesis_url_ttl_days: int = 7


def is_model_configured(api_key: str) -> bool:
    """Return True when *api_key* is set and is not the sample placeholder."""
    return bool(api_key) and api_key != PLACEHOLDER_API_KEY


settings = Settings()
