"""Per-service behaviour configuration models."""

from pydantic import BaseModel, Field


class ConnectionsConfig(BaseModel):
    """Relationship state machine settings."""

    verify_recipient: bool = Field(
        default=True,
        description="Require the acting identity to be the stored recipient on accept/reject",
    )
    max_cas_attempts: int = Field(
        default=5,
        ge=1,
        description="Re-reads allowed when a conditional update loses a race",
    )


class FeedConfig(BaseModel):
    """Post listing settings."""

    default_limit: int = Field(default=20, gt=0, description="Posts returned by default")
    max_limit: int = Field(default=100, gt=0, description="Largest accepted limit")
