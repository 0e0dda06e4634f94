"""
Configuration module for DreamRate.
Loads settings from .env file and environment variables.
"""

import os
from pathlib import Path
from typing import List

from dreamrate.utils.exceptions import ConfigurationError

# Try to load .env file
_env_path = Path(__file__).parent.parent / ".env"
if _env_path.exists():
    with open(_env_path) as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip().strip('"').strip("'")
                if key and key not in os.environ:
                    os.environ[key] = value


def _first_env(*names: str) -> str:
    for name in names:
        value = os.getenv(name, "")
        if value:
            return value
    return ""


class Settings:
    """Application configuration loaded from environment variables."""

    def __init__(self):
        self.app_name: str = os.getenv("APP_NAME", "DreamRate")
        self.api_version: str = os.getenv("API_VERSION", "v1")
        self.debug: bool = os.getenv("DEBUG", "false").lower() in ("true", "1", "yes")
        self.environment: str = os.getenv("ENVIRONMENT", "development")

        # Supabase (browser builds use the PUBLIC_ prefix)
        self.supabase_url: str = _first_env("SUPABASE_URL", "PUBLIC_SUPABASE_URL").rstrip("/")
        self.supabase_anon_key: str = _first_env("SUPABASE_ANON_KEY", "PUBLIC_SUPABASE_ANON_KEY")

        # CORS
        cors_raw = os.getenv("CORS_ORIGINS", "*")
        self.cors_origins: List[str] = [s.strip() for s in cors_raw.split(",")]

        # Feed sizes
        self.random_feed_default_count: int = int(os.getenv("RANDOM_FEED_DEFAULT_COUNT", "5"))
        self.random_feed_max_count: int = int(os.getenv("RANDOM_FEED_MAX_COUNT", "50"))

    @property
    def rest_url(self) -> str:
        """PostgREST endpoint of the Supabase project."""
        return f"{self.supabase_url}/rest/v1"

    def require_store_config(self) -> None:
        """Raise ConfigurationError unless both store settings are present."""
        missing = []
        if not self.supabase_url:
            missing.append("SUPABASE_URL")
        if not self.supabase_anon_key:
            missing.append("SUPABASE_ANON_KEY")
        if missing:
            raise ConfigurationError(
                message=f"Missing required setting(s): {', '.join(missing)}",
                details={"missing": missing},
            )


_settings = None


def get_settings() -> Settings:
    """Get application settings singleton."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
