"""Gateway configuration models."""

from pydantic import BaseModel, Field


class GatewayConfig(BaseModel):
    """Upstream service locations for the forwarding gateway."""

    profile_url: str = Field(default="http://localhost:8081", description="Profile service")
    feed_url: str = Field(default="http://localhost:8082", description="Feed service")
    connections_url: str = Field(
        default="http://localhost:8083", description="Connections service"
    )
    timeout_seconds: float = Field(default=60.0, gt=0, description="Upstream timeout")
