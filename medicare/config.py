"""Application configuration."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from medicare.schemas.views import MAX_PAGE_SIZE


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_parse_none_str="null",
        populate_by_name=True,
    )

    # Application
    app_name: str = Field(default="MediCare Pro", alias="APP_NAME")
    app_version: str = Field(default="2.0.0", alias="APP_VERSION")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")

    # Storage
    storage_backend: str = Field(
        default="file",
        alias="STORAGE_BACKEND",
        description="One of: memory, file, redis",
    )
    data_dir: Path = Field(default=Path(".medicare"), alias="DATA_DIR")
    storage_key_prefix: str = Field(default="mc_", alias="STORAGE_KEY_PREFIX")

    # Redis
    redis_host: str = Field(default="localhost", alias="REDIS_HOST")
    redis_port: int = Field(default=6379, alias="REDIS_PORT")
    redis_username: str = Field(default="default", alias="REDIS_USERNAME")
    redis_password: str = Field(default="", alias="REDIS_PASSWORD")
    redis_db: int = Field(default=0, alias="REDIS_DB")

    # Views
    patient_page_size: int = Field(default=10, ge=1, le=MAX_PAGE_SIZE, alias="PATIENT_PAGE_SIZE")

    # Dashboard (no bed inventory is tracked yet)
    available_beds: int = Field(default=15, ge=0, alias="AVAILABLE_BEDS")

    # Seed demo records when both patients and doctors are empty on start
    seed_demo_data: bool = Field(default=True, alias="SEED_DEMO_DATA")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="json", alias="LOG_FORMAT")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
