"""Configuration loading for TrustLink.

Configuration is loaded from TOML files with environment variable overrides.

Usage:
    from trustlink.config import get_settings

    settings = get_settings()
    backend = settings.storage.backend
"""

from functools import lru_cache

from trustlink.config.settings import Settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the singleton settings instance.

    Configuration is loaded in this order:
    1. Pydantic model defaults (in code)
    2. config/default.toml (base configuration)
    3. config/{TRUSTLINK_ENV}.toml (environment overrides)
    4. TRUSTLINK_* environment variables (runtime overrides)

    Call `get_settings.cache_clear()` to reload configuration.
    """
    return Settings()


def reload_settings() -> Settings:
    """Clear the settings cache and reload configuration."""
    get_settings.cache_clear()
    return get_settings()


__all__ = ["get_settings", "reload_settings", "Settings"]
