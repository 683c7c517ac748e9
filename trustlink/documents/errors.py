"""Store error hierarchy for document backends.

All store implementations raise these errors so callers can handle
failures without knowing the backend.
"""


class StoreError(Exception):
    """Base exception for all store errors."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class StoreConnectionError(StoreError):
    """Raised when the backend cannot be reached.

    Examples:
        - Redis server unavailable
        - Network timeouts
    """

    pass


class NotFoundError(StoreError):
    """Raised when a keyed update targets a document that does not exist.

    Lookups return None instead; this is only for writes.
    """

    pass


class ConflictError(StoreError):
    """Raised when a conditional write loses.

    Examples:
        - create() on an existing key
        - update() with a stale expected_version
        - a concurrent write during an optimistic transaction
    """

    pass
