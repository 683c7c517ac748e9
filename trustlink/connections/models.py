"""Relationship domain models.

Wire and storage field names are camelCase; Python attributes are
snake_case.
"""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


class RelationshipStatus(str, Enum):
    """Lifecycle state of a relationship."""

    REQUESTED = "requested"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Relationship(BaseModel):
    """A connection proposal between two identities.

    One document exists per unordered pair; `id` is derived from the pair.
    `from_id`, `to_id` and `created_at` never change after creation.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Pair identifier")
    from_id: str = Field(..., alias="fromUid", min_length=1, description="Initiator")
    to_id: str = Field(..., alias="toUid", min_length=1, description="Recipient")
    status: RelationshipStatus = Field(..., description="Current state")
    created_at: datetime = Field(..., alias="createdAt", description="Request time")
    updated_at: datetime = Field(..., alias="updatedAt", description="Last transition")


class ConnectionRequestBody(BaseModel):
    """Body of POST /v1/connections/request."""

    model_config = ConfigDict(populate_by_name=True)

    target_uid: str = Field(default="", alias="targetUid", description="Recipient uid")


class ConnectionActionBody(BaseModel):
    """Body of POST /v1/connections/accept and /reject."""

    model_config = ConfigDict(populate_by_name=True)

    from_uid: str = Field(default="", alias="fromUid", description="Original initiator")


class ConnectionList(BaseModel):
    """Response of GET /v1/connections."""

    connections: list[Relationship] = Field(default_factory=list)
    count: int = Field(default=0, ge=0)
