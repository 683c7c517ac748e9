"""Health check response models."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness plus backing store reachability."""

    status: Literal["ok", "degraded"] = Field(..., description="Overall status")
    service: str = Field(..., description="Service names served by this process")
    documents: bool = Field(default=True, description="Document store reachable")
