"""Deterministic relationship identifiers."""

SEPARATOR = "_"


def relationship_id(uid_a: str, uid_b: str) -> str:
    """Key for the unordered pair (uid_a, uid_b).

    Either party can compute it without a lookup, and it is the same
    regardless of argument order.

    >>> relationship_id("bob", "alice")
    'alice_bob'
    """
    first, second = sorted((uid_a, uid_b))
    return f"{first}{SEPARATOR}{second}"
