"""Document store factory."""

from trustlink.config.models.storage import StorageConfig
from trustlink.documents.store import DocumentStore
from trustlink.documents.stores.inmemory import InMemoryDocumentStore
from trustlink.documents.stores.redis import RedisDocumentStore


def create_document_store(config: StorageConfig) -> DocumentStore:
    """Create the configured document store backend.

    Args:
        config: Storage configuration

    Returns:
        A DocumentStore instance
    """
    if config.backend == "redis":
        return RedisDocumentStore.from_url(config.redis_url, key_prefix=config.key_prefix)
    return InMemoryDocumentStore()
