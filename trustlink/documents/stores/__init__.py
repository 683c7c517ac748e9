"""Document store backends."""

from trustlink.documents.stores.inmemory import InMemoryDocumentStore
from trustlink.documents.stores.redis import RedisDocumentStore

__all__ = [
    "InMemoryDocumentStore",
    "RedisDocumentStore",
]
