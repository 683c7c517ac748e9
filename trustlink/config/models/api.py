"""API server configuration models."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

ServiceName = Literal["profile", "feed", "connections"]


class APIConfig(BaseModel):
    """Configuration for the HTTP API server."""

    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8080, ge=1, le=65535, description="Port number")
    services: list[ServiceName] = Field(
        default=["profile", "feed", "connections"],
        description="Service routers mounted by this process",
    )
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=True,
        description="Allow credentials in CORS",
    )

    @field_validator("cors_origins", "services", mode="before")
    @classmethod
    def parse_comma_list(cls, v: str | list[str]) -> list[str]:
        """Parse comma separated strings from env vars."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v
