"""Fixtures for API route tests."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from trustlink.api.app import create_app
from trustlink.api.container import ServiceContainer
from trustlink.auth.static import StaticIdentityProvider
from trustlink.config.settings import Settings
from trustlink.documents.stores.inmemory import InMemoryDocumentStore
from trustlink.events.publishers.inmemory import InMemoryEventPublisher


@pytest.fixture
def container(
    settings: Settings,
    documents: InMemoryDocumentStore,
    publisher: InMemoryEventPublisher,
) -> ServiceContainer:
    return ServiceContainer.from_components(
        settings, documents, publisher, StaticIdentityProvider()
    )


@pytest.fixture
def app(settings: Settings, container: ServiceContainer) -> FastAPI:
    return create_app(settings, container)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)
