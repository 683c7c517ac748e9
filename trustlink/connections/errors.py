"""Relationship state machine errors."""


class RelationshipError(Exception):
    """Base exception for relationship operations."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidRelationshipError(RelationshipError):
    """Missing identifiers or a self-connection."""

    pass


class RelationshipNotFoundError(RelationshipError):
    """No relationship exists for the pair."""

    pass


class RecipientMismatchError(RelationshipError):
    """The acting identity is not the stored recipient."""

    pass


class InvalidTransitionError(RelationshipError):
    """The relationship is in a terminal state for this action."""

    pass


class RelationshipConflictError(RelationshipError):
    """The pair already has a relationship that blocks the request."""

    pass
