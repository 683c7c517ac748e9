"""Configuration section models."""

from trustlink.config.models.api import APIConfig
from trustlink.config.models.auth import AuthConfig
from trustlink.config.models.events import EventsConfig
from trustlink.config.models.gateway import GatewayConfig
from trustlink.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
)
from trustlink.config.models.services import ConnectionsConfig, FeedConfig
from trustlink.config.models.storage import StorageConfig

__all__ = [
    "APIConfig",
    "AuthConfig",
    "ConnectionsConfig",
    "EventsConfig",
    "FeedConfig",
    "GatewayConfig",
    "LoggingConfig",
    "MetricsConfig",
    "ObservabilityConfig",
    "StorageConfig",
]
