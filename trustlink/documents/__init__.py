"""Keyed document storage with conditional writes."""

from trustlink.documents.errors import (
    ConflictError,
    NotFoundError,
    StoreConnectionError,
    StoreError,
)
from trustlink.documents.factory import create_document_store
from trustlink.documents.store import Document, DocumentStore

__all__ = [
    "ConflictError",
    "Document",
    "DocumentStore",
    "NotFoundError",
    "StoreConnectionError",
    "StoreError",
    "create_document_store",
]
