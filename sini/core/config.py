"""
Library configuration.

Centralized configuration management with environment variables.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings"""

    model_config = SettingsConfigDict(
        env_prefix="SINI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Element access
    BOUNDS_CHECK: bool = True  # False turns at()/column()/set() into raw access

    # Element type of the unparameterized Mat2/Mat3/Mat4 classes
    DEFAULT_DTYPE: str = "float64"

    # Execution targets recorded by sini.compat.dual_target
    TARGETS: list[str] = ["host", "device"]

    # Logging
    LOG_LEVEL: str = "WARNING"
    LOG_FORMAT: str = "text"  # json or text
    LOG_FILE: Optional[str] = None


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()
