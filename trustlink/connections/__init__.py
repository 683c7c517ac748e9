"""Connection requests between identities."""

from trustlink.connections.errors import (
    InvalidRelationshipError,
    InvalidTransitionError,
    RecipientMismatchError,
    RelationshipConflictError,
    RelationshipError,
    RelationshipNotFoundError,
)
from trustlink.connections.ids import relationship_id
from trustlink.connections.models import Relationship, RelationshipStatus
from trustlink.connections.store import RelationshipStore

__all__ = [
    "InvalidRelationshipError",
    "InvalidTransitionError",
    "RecipientMismatchError",
    "Relationship",
    "RelationshipConflictError",
    "RelationshipError",
    "RelationshipNotFoundError",
    "RelationshipStatus",
    "RelationshipStore",
    "relationship_id",
]
