"""DocumentStore abstract interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, TypeAdapter

_DATETIME = TypeAdapter(datetime)


def timestamp(value: datetime) -> str:
    """Serialize a datetime the way model dumps store it (`...Z` for UTC)."""
    return _DATETIME.dump_python(value, mode="json")


class Document(BaseModel):
    """A stored document with its optimistic-concurrency version.

    `data` holds JSON-compatible values only. `version` starts at 1 and is
    incremented by every write.
    """

    key: str = Field(..., description="Document key within its collection")
    data: dict[str, Any] = Field(default_factory=dict, description="Document body")
    version: int = Field(default=1, ge=1, description="Write counter")


class DocumentStore(ABC):
    """Abstract interface for keyed document storage.

    Collections are flat namespaces of keys. Queries support conjunctive
    equality filters only.
    """

    @abstractmethod
    async def get(self, collection: str, key: str) -> Document | None:
        """Get a document, or None if absent."""
        pass

    @abstractmethod
    async def create(self, collection: str, key: str, data: dict[str, Any]) -> Document:
        """Create a document; raise ConflictError if the key exists."""
        pass

    @abstractmethod
    async def set(self, collection: str, key: str, data: dict[str, Any]) -> Document:
        """Create or overwrite a document unconditionally."""
        pass

    @abstractmethod
    async def update(
        self,
        collection: str,
        key: str,
        changes: dict[str, Any],
        *,
        expected_version: int | None = None,
    ) -> Document:
        """Merge top-level fields into an existing document.

        Raises:
            NotFoundError: If the key does not exist
            ConflictError: If expected_version is given and does not match,
                or a concurrent write interleaved
        """
        pass

    @abstractmethod
    async def query(self, collection: str, **filters: Any) -> list[Document]:
        """Return documents whose fields equal every filter value."""
        pass

    @abstractmethod
    async def ping(self) -> bool:
        """Check backend reachability."""
        pass

    async def close(self) -> None:
        """Release backend resources."""
        return None
