"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./finance_tracker.db"

    # Service
    service_name: str = "finance-tracker"
    log_level: str = "INFO"

    # Bearer tokens
    jwt_secret: str = "change-me-to-a-long-random-secret-value"
    jwt_algorithm: str = "HS256"
    jwt_expires_days: int = 7

    # Google sign-in
    google_client_id: str = "your-google-client-id.apps.googleusercontent.com"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Storage reads made while building a report
    storage_timeout_seconds: float = 5.0


settings = Settings()
