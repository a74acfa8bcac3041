"""Configuration settings and environment variables."""
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Client settings loaded from BTCCHINA_* environment variables."""

    # BTCChina credentials
    access_key: Optional[str] = Field(default=None)
    secret_key: Optional[str] = Field(default=None)

    # Logging
    log_level: str = Field(default="INFO")

    class Config:
        env_prefix = "BTCCHINA_"
        env_file = ".env"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
