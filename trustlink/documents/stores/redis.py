"""Redis implementation of DocumentStore.

Each document is a hash holding its JSON body and a version counter:

- {prefix}:doc:{collection}:{key} - hash with fields `data` and `version`
- {prefix}:index:{collection} - set of keys in the collection

Conditional writes use WATCH/MULTI optimistic transactions. Queries scan
the collection index and filter client-side, which is adequate for the
equality filters used here but not for large collections.
"""

import json
from typing import Any

import redis.asyncio as redis

from trustlink.documents.errors import (
    ConflictError,
    NotFoundError,
    StoreConnectionError,
)
from trustlink.documents.store import Document, DocumentStore
from trustlink.observability.logging import get_logger

logger = get_logger(__name__)


class RedisDocumentStore(DocumentStore):
    """Redis-backed document store with optimistic concurrency."""

    def __init__(self, client: redis.Redis, key_prefix: str = "trustlink") -> None:
        """Initialize the store.

        Args:
            client: Redis client created with decode_responses=True
            key_prefix: Namespace prefix for every key
        """
        self._client = client
        self._prefix = key_prefix

    @classmethod
    def from_url(cls, url: str, key_prefix: str = "trustlink") -> "RedisDocumentStore":
        """Create a store with its own client."""
        return cls(redis.from_url(url, decode_responses=True), key_prefix=key_prefix)

    def _doc_key(self, collection: str, key: str) -> str:
        return f"{self._prefix}:doc:{collection}:{key}"

    def _index_key(self, collection: str) -> str:
        return f"{self._prefix}:index:{collection}"

    @staticmethod
    def _to_document(key: str, raw: dict[str, str]) -> Document:
        return Document(key=key, data=json.loads(raw["data"]), version=int(raw["version"]))

    async def get(self, collection: str, key: str) -> Document | None:
        try:
            raw = await self._client.hgetall(self._doc_key(collection, key))
        except redis.RedisError as e:
            logger.error("redis_get_error", collection=collection, key=key, error=str(e))
            raise StoreConnectionError(f"Failed to get {collection}/{key}: {e}", cause=e) from e
        return self._to_document(key, raw) if raw else None

    async def create(self, collection: str, key: str, data: dict[str, Any]) -> Document:
        doc_key = self._doc_key(collection, key)
        try:
            async with self._client.pipeline(transaction=True) as pipe:
                await pipe.watch(doc_key)
                if await pipe.exists(doc_key):
                    raise ConflictError(f"Document {collection}/{key} already exists")
                pipe.multi()
                pipe.hset(doc_key, mapping={"data": json.dumps(data), "version": 1})
                pipe.sadd(self._index_key(collection), key)
                await pipe.execute()
        except redis.WatchError as e:
            raise ConflictError(f"Concurrent create of {collection}/{key}", cause=e) from e
        except redis.RedisError as e:
            logger.error("redis_create_error", collection=collection, key=key, error=str(e))
            raise StoreConnectionError(
                f"Failed to create {collection}/{key}: {e}", cause=e
            ) from e

        return Document(key=key, data=data, version=1)

    async def set(self, collection: str, key: str, data: dict[str, Any]) -> Document:
        doc_key = self._doc_key(collection, key)
        try:
            async with self._client.pipeline(transaction=True) as pipe:
                pipe.hset(doc_key, "data", json.dumps(data))
                pipe.hincrby(doc_key, "version", 1)
                pipe.sadd(self._index_key(collection), key)
                _, version, _ = await pipe.execute()
        except redis.RedisError as e:
            logger.error("redis_set_error", collection=collection, key=key, error=str(e))
            raise StoreConnectionError(f"Failed to set {collection}/{key}: {e}", cause=e) from e

        return Document(key=key, data=data, version=int(version))

    async def update(
        self,
        collection: str,
        key: str,
        changes: dict[str, Any],
        *,
        expected_version: int | None = None,
    ) -> Document:
        doc_key = self._doc_key(collection, key)
        try:
            async with self._client.pipeline(transaction=True) as pipe:
                await pipe.watch(doc_key)
                raw = await pipe.hgetall(doc_key)
                if not raw:
                    raise NotFoundError(f"Document {collection}/{key} not found")
                current = self._to_document(key, raw)
                if expected_version is not None and current.version != expected_version:
                    raise ConflictError(
                        f"Document {collection}/{key} is at version {current.version}, "
                        f"expected {expected_version}"
                    )
                data = {**current.data, **changes}
                version = current.version + 1
                pipe.multi()
                pipe.hset(doc_key, mapping={"data": json.dumps(data), "version": version})
                await pipe.execute()
        except redis.WatchError as e:
            raise ConflictError(f"Concurrent update of {collection}/{key}", cause=e) from e
        except redis.RedisError as e:
            logger.error("redis_update_error", collection=collection, key=key, error=str(e))
            raise StoreConnectionError(
                f"Failed to update {collection}/{key}: {e}", cause=e
            ) from e

        return Document(key=key, data=data, version=version)

    async def query(self, collection: str, **filters: Any) -> list[Document]:
        try:
            keys = sorted(await self._client.smembers(self._index_key(collection)))
            async with self._client.pipeline(transaction=False) as pipe:
                for key in keys:
                    pipe.hgetall(self._doc_key(collection, key))
                rows = await pipe.execute()
        except redis.RedisError as e:
            logger.error("redis_query_error", collection=collection, error=str(e))
            raise StoreConnectionError(f"Failed to query {collection}: {e}", cause=e) from e

        results = []
        for key, raw in zip(keys, rows, strict=True):
            if not raw:
                continue
            doc = self._to_document(key, raw)
            if all(doc.data.get(field) == value for field, value in filters.items()):
                results.append(doc)
        return results

    async def ping(self) -> bool:
        try:
            return bool(await self._client.ping())
        except redis.RedisError:
            return False

    async def close(self) -> None:
        await self._client.aclose()
