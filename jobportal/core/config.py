"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Relational database (PostgreSQL in production, SQLite for local runs/tests)
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "portal_user"
    postgres_password: str = "password"
    postgres_db: str = "jobportal_db"
    database_url: str = ""

    # MongoDB (resumes, conversations, stored files)
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "jobportal_docs"

    # AI assistant. "mock" keeps everything deterministic, "llm" routes chat
    # through an OpenAI-compatible endpoint.
    ai_mode: str = "mock"
    ai_api_key: str = ""
    ai_base_url: str = "https://api.deepseek.com/v1"
    ai_model: str = "deepseek-chat"
    ai_simulated_delay_ms: int = 0

    # JWT Auth
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440
    reset_token_expire_minutes: int = 30

    # Storage buckets
    public_base_url: str = "http://localhost:8000"
    max_upload_mb: int = 5

    # App
    debug: bool = False
    log_level: str = "INFO"
    log_file: str = ""

    @property
    def sqlalchemy_url(self) -> str:
        """Explicit DATABASE_URL wins, otherwise build the PostgreSQL URL."""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
