"""Domain event payloads and topic names."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Topic(str, Enum):
    """Routing keys on the topic exchange."""

    POST_CREATED = "post.created"
    CONNECTION_REQUESTED = "connection.requested"
    CONNECTION_ACCEPTED = "connection.accepted"


class ConnectionEvent(BaseModel):
    """Published when a connection is requested or accepted."""

    model_config = ConfigDict(populate_by_name=True)

    from_uid: str = Field(..., alias="fromUid", description="Initiator")
    to_uid: str = Field(..., alias="toUid", description="Recipient")
    created_at: datetime = Field(..., alias="createdAt", description="Event time")


class PostCreatedEvent(BaseModel):
    """Published when a post is created."""

    model_config = ConfigDict(populate_by_name=True)

    post_id: str = Field(..., alias="postId", description="Post identifier")
    author_uid: str = Field(..., alias="authorUid", description="Author")
    created_at: datetime = Field(..., alias="createdAt", description="Post time")
