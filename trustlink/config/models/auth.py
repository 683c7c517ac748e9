"""Authentication configuration models."""

from typing import Literal

from pydantic import BaseModel, Field

IdentityProviderType = Literal["jwt", "static"]


class AuthConfig(BaseModel):
    """Bearer token verification settings.

    The static provider accepts the token itself as the uid and is meant
    for local development only.
    """

    provider: IdentityProviderType = Field(
        default="jwt",
        description="Identity provider implementation",
    )
    jwt_key: str | None = Field(
        default=None,
        description="HMAC secret or PEM public key (from env var)",
    )
    algorithms: list[str] = Field(
        default=["HS256"],
        description="Accepted signing algorithms",
    )
    audience: str | None = Field(default=None, description="Expected aud claim")
    issuer: str | None = Field(default=None, description="Expected iss claim")
