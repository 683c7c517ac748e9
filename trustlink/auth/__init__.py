"""Bearer credential verification."""

from trustlink.auth.identity import AuthenticationError, Identity, IdentityProvider
from trustlink.auth.jwt import JWTIdentityProvider
from trustlink.auth.static import StaticIdentityProvider
from trustlink.config.models.auth import AuthConfig


def create_identity_provider(config: AuthConfig) -> IdentityProvider:
    """Create the configured identity provider."""
    if config.provider == "static":
        return StaticIdentityProvider()
    return JWTIdentityProvider.from_config(config)


__all__ = [
    "AuthenticationError",
    "Identity",
    "IdentityProvider",
    "JWTIdentityProvider",
    "StaticIdentityProvider",
    "create_identity_provider",
]
