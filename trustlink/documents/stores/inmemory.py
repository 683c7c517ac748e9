"""In-memory implementation of DocumentStore."""

import asyncio
import copy
from typing import Any

from trustlink.documents.errors import ConflictError, NotFoundError
from trustlink.documents.store import Document, DocumentStore


class InMemoryDocumentStore(DocumentStore):
    """In-memory implementation of DocumentStore for testing and development.

    Uses dict storage with linear scan for queries. A single lock makes
    every write atomic, so conditional updates behave like the production
    backend. Documents are deep-copied in and out.
    """

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, Document]] = {}
        self._lock = asyncio.Lock()

    def _collection(self, name: str) -> dict[str, Document]:
        return self._collections.setdefault(name, {})

    async def get(self, collection: str, key: str) -> Document | None:
        doc = self._collection(collection).get(key)
        return doc.model_copy(deep=True) if doc else None

    async def create(self, collection: str, key: str, data: dict[str, Any]) -> Document:
        async with self._lock:
            docs = self._collection(collection)
            if key in docs:
                raise ConflictError(f"Document {collection}/{key} already exists")
            docs[key] = Document(key=key, data=copy.deepcopy(data), version=1)
            return docs[key].model_copy(deep=True)

    async def set(self, collection: str, key: str, data: dict[str, Any]) -> Document:
        async with self._lock:
            docs = self._collection(collection)
            previous = docs.get(key)
            version = previous.version + 1 if previous else 1
            docs[key] = Document(key=key, data=copy.deepcopy(data), version=version)
            return docs[key].model_copy(deep=True)

    async def update(
        self,
        collection: str,
        key: str,
        changes: dict[str, Any],
        *,
        expected_version: int | None = None,
    ) -> Document:
        async with self._lock:
            docs = self._collection(collection)
            current = docs.get(key)
            if current is None:
                raise NotFoundError(f"Document {collection}/{key} not found")
            if expected_version is not None and current.version != expected_version:
                raise ConflictError(
                    f"Document {collection}/{key} is at version {current.version}, "
                    f"expected {expected_version}"
                )
            data = {**current.data, **copy.deepcopy(changes)}
            docs[key] = Document(key=key, data=data, version=current.version + 1)
            return docs[key].model_copy(deep=True)

    async def query(self, collection: str, **filters: Any) -> list[Document]:
        results = []
        for doc in self._collection(collection).values():
            if all(doc.data.get(field) == value for field, value in filters.items()):
                results.append(doc.model_copy(deep=True))
        return results

    async def ping(self) -> bool:
        return True
