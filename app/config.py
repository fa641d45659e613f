"""Centralized application settings using pydantic settings."""

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PATH = Path(__file__).parent.parent / ".env"


def load_env_file(path: Path = ENV_PATH) -> bool:
    """Load a .env file into the process environment; real env vars win."""
    return load_dotenv(dotenv_path=path, override=False)


load_env_file()


class Settings(BaseSettings):
    """Environment-aware configuration (listening address, API key, logging)."""

    app_name: str = "Products API"
    host: str = "0.0.0.0"
    port: int = Field(default=3000, description="Listening port (PORT)")
    api_key: Optional[str] = Field(
        default=None,
        description="Shared secret expected in the X-API-Key header (API_KEY)",
    )
    log_level: str = "INFO"

    # CORS settings - stored as string, converted to list via property
    cors_origins_raw: Optional[str] = Field(
        default=None,
        validation_alias="CORS_ORIGINS",
        description="Comma-separated list of allowed CORS origins",
        exclude=True,
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS_ORIGINS from comma-separated string to list."""
        if self.cors_origins_raw is None or not self.cors_origins_raw.strip():
            return ["*"]
        origins = [
            origin.strip().rstrip("/")
            for origin in self.cors_origins_raw.split(",")
            if origin.strip()
        ]
        return origins if origins else ["*"]

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Optional[str]) -> str:
        if not v:
            return "INFO"
        return str(v).upper()


@lru_cache
def get_settings() -> Settings:
    """Provide singleton-like access for dependency injection."""
    return Settings()
