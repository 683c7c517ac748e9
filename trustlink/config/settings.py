"""Root settings model for TrustLink configuration."""

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from trustlink.config.models.api import APIConfig
from trustlink.config.models.auth import AuthConfig
from trustlink.config.models.events import EventsConfig
from trustlink.config.models.gateway import GatewayConfig
from trustlink.config.models.observability import ObservabilityConfig
from trustlink.config.models.services import ConnectionsConfig, FeedConfig
from trustlink.config.models.storage import StorageConfig

DEFAULT_ENVIRONMENT = "development"


def config_dir() -> Path:
    """Directory holding default.toml and the per-environment files.

    TRUSTLINK_CONFIG_DIR wins when set and must exist. Otherwise the nearest
    `config/` at or above the working directory is used; when there is none,
    only code defaults and environment variables apply.

    Raises:
        FileNotFoundError: If TRUSTLINK_CONFIG_DIR names a missing directory
    """
    override = os.environ.get("TRUSTLINK_CONFIG_DIR")
    if override:
        path = Path(override)
        if not path.is_dir():
            raise FileNotFoundError(f"Config directory not found: {override}")
        return path

    for parent in (Path.cwd(), *Path.cwd().parents):
        if (parent / "config" / "default.toml").is_file():
            return parent / "config"
    return Path("config")


def environment() -> str:
    """Deployment environment from TRUSTLINK_ENV, `development` if unset."""
    return os.environ.get("TRUSTLINK_ENV", DEFAULT_ENVIRONMENT)


def toml_files() -> list[Path]:
    """TOML layers from lowest to highest precedence; absent files are skipped."""
    directory = config_dir()
    return [directory / "default.toml", directory / f"{environment()}.toml"]


class Settings(BaseSettings):
    """Root configuration object containing all nested configuration sections.

    Configuration is loaded in this order:
    1. Pydantic model defaults (in code)
    2. config/default.toml (base configuration)
    3. config/{TRUSTLINK_ENV}.toml (environment overrides)
    4. TRUSTLINK_* environment variables (runtime overrides)
    """

    model_config = SettingsConfigDict(
        env_prefix="TRUSTLINK_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="trustlink", description="Application name for logging")
    debug: bool = Field(default=False, description="Enable debug mode")

    api: APIConfig = Field(default_factory=APIConfig, description="API server configuration")
    storage: StorageConfig = Field(
        default_factory=StorageConfig,
        description="Document store configuration",
    )
    events: EventsConfig = Field(
        default_factory=EventsConfig,
        description="Event bus configuration",
    )
    auth: AuthConfig = Field(default_factory=AuthConfig, description="Token verification")
    connections: ConnectionsConfig = Field(
        default_factory=ConnectionsConfig,
        description="Relationship state machine configuration",
    )
    feed: FeedConfig = Field(default_factory=FeedConfig, description="Feed configuration")
    gateway: GatewayConfig = Field(
        default_factory=GatewayConfig,
        description="Gateway upstreams",
    )
    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
        description="Observability configuration",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Layer the TOML files under constructor arguments and env vars.

        Priority order (highest to lowest):
        1. init_settings (constructor arguments)
        2. env_settings (TRUSTLINK_* environment variables)
        3. config/{TRUSTLINK_ENV}.toml
        4. config/default.toml
        5. (defaults from model)

        Sources are deep-merged, so an environment file only needs the
        keys it changes.
        """
        toml_sources = [
            TomlConfigSettingsSource(settings_cls, toml_file=path)
            for path in reversed(toml_files())
        ]
        return (init_settings, env_settings, *toml_sources)
