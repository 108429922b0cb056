"""Application configuration.

Configuration is loaded from environment variables using pydantic-settings.
Every variable is prefixed with ``SUNMOON_``.

## Optional Environment Variables

- SUNMOON_CIVIL_TIMEZONE: IANA zone used for civil-day boundaries when a call
  is not made in UTC (default: UTC)
- SUNMOON_DEFAULT_HEIGHT_M: Observer height above the horizon in meters used
  by the CLI and API when none is given (default: 0)
- SUNMOON_INCLUDE_DEPRECATED_NAMES: Add deprecated alias names to sun time
  results produced by the CLI and API (default: false)
- SUNMOON_LOG_LEVEL: Logging level for the CLI and API (default: WARNING)
- SUNMOON_DEBUG: Enable debug mode (default: false)

## Example .env file

```
SUNMOON_CIVIL_TIMEZONE=Europe/Berlin
SUNMOON_DEFAULT_HEIGHT_M=120
SUNMOON_LOG_LEVEL=INFO
```
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SUNMOON_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Sun & Moon Calculator"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    # Civil day
    civil_timezone: str = Field(
        default="UTC",
        description="IANA timezone used for civil-day boundaries outside UTC mode",
    )

    # Defaults for the outer surfaces (CLI, API)
    default_height_m: float = Field(default=0.0, ge=0)
    include_deprecated_names: bool = False

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept log levels in any case."""
        return v.upper() if isinstance(v, str) else v

    @field_validator("civil_timezone")
    @classmethod
    def validate_civil_timezone(cls, v: str) -> str:
        """Ensure the civil timezone is a known IANA zone."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: '{v}'") from exc
        return v

    @property
    def tzinfo(self) -> ZoneInfo:
        """Zone object for the configured civil timezone."""
        return ZoneInfo(self.civil_timezone)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are loaded once and cached. To reload, clear the cache:
    ```python
    get_settings.cache_clear()
    ```
    """
    return Settings()


def get_settings_uncached() -> Settings:
    """Get fresh settings without caching.

    Useful for testing when environment variables change.
    """
    return Settings()
