"""Tests for the connections endpoints."""

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from trustlink.api.app import create_app
from trustlink.api.container import ServiceContainer
from trustlink.api.dependencies import get_relationship_store
from trustlink.auth.static import StaticIdentityProvider
from trustlink.config.models.services import ConnectionsConfig
from trustlink.config.settings import Settings
from trustlink.connections.store import RelationshipStore
from trustlink.documents.errors import StoreConnectionError
from trustlink.documents.stores.inmemory import InMemoryDocumentStore
from trustlink.events.publishers.inmemory import InMemoryEventPublisher


def auth(uid: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {uid}"}


class TestRequestConnection:
    """Tests for POST /v1/connections/request."""

    def test_creates_request(
        self, client: TestClient, publisher: InMemoryEventPublisher
    ) -> None:
        response = client.post(
            "/v1/connections/request", json={"targetUid": "bob"}, headers=auth("alice")
        )

        assert response.status_code == 201
        data = response.json()
        assert data["id"] == "alice_bob"
        assert data["fromUid"] == "alice"
        assert data["toUid"] == "bob"
        assert data["status"] == "requested"
        assert "createdAt" in data
        assert "updatedAt" in data
        assert publisher.topics() == ["connection.requested"]

    def test_self_request_400(self, client: TestClient) -> None:
        response = client.post(
            "/v1/connections/request", json={"targetUid": "alice"}, headers=auth("alice")
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_REQUEST"

    def test_missing_target_400(self, client: TestClient) -> None:
        response = client.post("/v1/connections/request", json={}, headers=auth("alice"))
        assert response.status_code == 400

    def test_malformed_body_400(self, client: TestClient) -> None:
        response = client.post(
            "/v1/connections/request",
            content=b"{not json",
            headers={**auth("alice"), "Content-Type": "application/json"},
        )
        assert response.status_code == 400

    def test_reverse_request_409(self, client: TestClient) -> None:
        client.post("/v1/connections/request", json={"targetUid": "bob"}, headers=auth("alice"))

        response = client.post(
            "/v1/connections/request", json={"targetUid": "alice"}, headers=auth("bob")
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CONFLICT"

    def test_unauthenticated_401(self, client: TestClient) -> None:
        response = client.post("/v1/connections/request", json={"targetUid": "bob"})

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHENTICATED"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_store_unavailable_500(self, app: FastAPI, client: TestClient) -> None:
        broken = AsyncMock()
        broken.create.side_effect = StoreConnectionError("refused")
        app.dependency_overrides[get_relationship_store] = lambda: RelationshipStore(
            broken, InMemoryEventPublisher()
        )

        response = client.post(
            "/v1/connections/request", json={"targetUid": "bob"}, headers=auth("alice")
        )

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "SERVICE_UNAVAILABLE"


class TestAnswerConnection:
    """Tests for POST /v1/connections/accept and /reject."""

    def test_accept(self, client: TestClient, publisher: InMemoryEventPublisher) -> None:
        client.post("/v1/connections/request", json={"targetUid": "bob"}, headers=auth("alice"))

        response = client.post(
            "/v1/connections/accept", json={"fromUid": "alice"}, headers=auth("bob")
        )

        assert response.status_code == 200
        assert response.json()["status"] == "accepted"
        assert publisher.topics() == ["connection.requested", "connection.accepted"]

    def test_accept_missing_404(self, client: TestClient) -> None:
        response = client.post(
            "/v1/connections/accept", json={"fromUid": "alice"}, headers=auth("bob")
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    def test_accept_without_from_uid_400(self, client: TestClient) -> None:
        response = client.post("/v1/connections/accept", json={}, headers=auth("bob"))
        assert response.status_code == 400

    def test_sender_cannot_accept_403(self, client: TestClient) -> None:
        client.post("/v1/connections/request", json={"targetUid": "bob"}, headers=auth("alice"))

        response = client.post(
            "/v1/connections/accept", json={"fromUid": "bob"}, headers=auth("alice")
        )

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "FORBIDDEN"

    def test_reject_then_accept_409(self, client: TestClient) -> None:
        client.post("/v1/connections/request", json={"targetUid": "bob"}, headers=auth("alice"))

        rejected = client.post(
            "/v1/connections/reject", json={"fromUid": "alice"}, headers=auth("bob")
        )
        accepted = client.post(
            "/v1/connections/accept", json={"fromUid": "alice"}, headers=auth("bob")
        )

        assert rejected.status_code == 200
        assert rejected.json()["status"] == "rejected"
        assert accepted.status_code == 409


class TestListConnections:
    """Tests for GET /v1/connections."""

    def test_empty_list(self, client: TestClient) -> None:
        response = client.get("/v1/connections", headers=auth("alice"))

        assert response.status_code == 200
        assert response.json() == {"connections": [], "count": 0}

    def test_both_parties_see_accepted(self, client: TestClient) -> None:
        client.post("/v1/connections/request", json={"targetUid": "bob"}, headers=auth("alice"))
        client.post("/v1/connections/accept", json={"fromUid": "alice"}, headers=auth("bob"))

        for uid in ("alice", "bob"):
            data = client.get("/v1/connections", headers=auth(uid)).json()
            assert data["count"] == 1
            assert data["connections"][0]["id"] == "alice_bob"

    def test_filter_by_status(self, client: TestClient) -> None:
        client.post("/v1/connections/request", json={"targetUid": "bob"}, headers=auth("alice"))

        response = client.get(
            "/v1/connections", params={"status": "requested"}, headers=auth("bob")
        )

        assert response.json()["count"] == 1

    @pytest.mark.parametrize("status", ["blocked", "pending", ""])
    def test_unknown_status_lists_nothing(self, client: TestClient, status: str) -> None:
        client.post("/v1/connections/request", json={"targetUid": "bob"}, headers=auth("alice"))

        response = client.get(
            "/v1/connections", params={"status": status}, headers=auth("alice")
        )

        assert response.status_code == 200
        assert response.json() == {"connections": [], "count": 0}


class TestRecipientCheckDisabled:
    """Either party may answer when recipient verification is off."""

    def test_sender_can_accept(
        self,
        documents: InMemoryDocumentStore,
        publisher: InMemoryEventPublisher,
    ) -> None:
        settings = Settings(
            auth={"provider": "static"},
            connections=ConnectionsConfig(verify_recipient=False),
        )
        container = ServiceContainer.from_components(
            settings, documents, publisher, StaticIdentityProvider()
        )
        client = TestClient(create_app(settings, container), raise_server_exceptions=False)
        client.post("/v1/connections/request", json={"targetUid": "bob"}, headers=auth("alice"))

        response = client.post(
            "/v1/connections/accept", json={"fromUid": "bob"}, headers=auth("alice")
        )

        assert response.status_code == 200
        assert response.json()["status"] == "accepted"
