"""Configuration from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings

from .errors import ConfigurationError

DEFAULT_BASE_URL = "https://api.polygon.io"
API_KEY_ENV_VAR = "POLYGON_API_KEY"


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables."""

    polygon_api_key: str | None = None
    polygon_base_url: str = DEFAULT_BASE_URL

    model_config = {
        "env_prefix": "",
        "case_sensitive": False,
        "env_file": ".env",
        "extra": "ignore",
    }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings for the current process."""
    return Settings()


def load_api_key(override: str | None = None) -> str:
    """Return the Polygon API key, preferring an explicit override.

    Raises ConfigurationError when neither the override nor the
    environment supplies a non-blank key.
    """
    if override is not None and override.strip():
        return override.strip()

    api_key = (get_settings().polygon_api_key or "").strip()
    if not api_key:
        raise ConfigurationError(f"Missing {API_KEY_ENV_VAR} environment variable.")
    return api_key
