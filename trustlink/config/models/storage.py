"""Document storage backend configuration models."""

from typing import Literal

from pydantic import BaseModel, Field

DocumentBackendType = Literal["inmemory", "redis"]


class StorageConfig(BaseModel):
    """Configuration for the document store."""

    backend: DocumentBackendType = Field(
        default="inmemory",
        description="Backend type",
    )
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL",
    )
    key_prefix: str = Field(
        default="trustlink",
        description="Key prefix for all documents",
    )
