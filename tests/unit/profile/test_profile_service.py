"""Unit tests for ProfileService."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from trustlink.auth.identity import Identity
from trustlink.documents.stores.inmemory import InMemoryDocumentStore
from trustlink.profile.models import ProfileUpdate
from trustlink.profile.service import COLLECTION, ProfileNotFoundError, ProfileService

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def service(documents: InMemoryDocumentStore) -> ProfileService:
    return ProfileService(documents, clock=lambda: NOW)


class TestGetOrCreate:
    """Tests for ProfileService.get_or_create."""

    async def test_creates_from_claims(
        self, service: ProfileService, documents: InMemoryDocumentStore
    ) -> None:
        identity = Identity(
            uid="alice", email="alice@example.com", name="Alice", picture="https://img/a.png"
        )

        profile = await service.get_or_create(identity)

        assert profile.uid == "alice"
        assert profile.display_name == "Alice"
        assert profile.email == "alice@example.com"
        assert profile.photo_url == "https://img/a.png"
        assert profile.created_at == NOW
        doc = await documents.get(COLLECTION, "alice")
        assert doc is not None
        assert doc.data["displayName"] == "Alice"
        assert "uid" not in doc.data

    async def test_existing_profile_returned_unchanged(self, service: ProfileService) -> None:
        await service.get_or_create(Identity(uid="alice", name="Alice"))

        profile = await service.get_or_create(Identity(uid="alice", name="Renamed"))

        assert profile.display_name == "Alice"

    async def test_missing_claims_default_empty(self, service: ProfileService) -> None:
        profile = await service.get_or_create(Identity(uid="bob"))
        assert profile.display_name == ""
        assert profile.email == ""
        assert profile.photo_url is None


class TestUpdate:
    """Tests for ProfileService.update."""

    async def test_applies_only_set_fields(self, documents: InMemoryDocumentStore) -> None:
        times = iter([NOW, datetime(2024, 5, 2, tzinfo=UTC)])
        service = ProfileService(documents, clock=lambda: next(times))
        await service.get_or_create(Identity(uid="alice", name="Alice"))

        updated = await service.update(
            "alice", ProfileUpdate.model_validate({"bio": "hello", "location": "Lisbon"})
        )

        assert updated.bio == "hello"
        assert updated.location == "Lisbon"
        assert updated.display_name == "Alice"
        assert updated.created_at == NOW
        assert updated.updated_at == datetime(2024, 5, 2, tzinfo=UTC)

    async def test_camel_case_fields_accepted(self, service: ProfileService) -> None:
        await service.get_or_create(Identity(uid="alice"))

        updated = await service.update(
            "alice", ProfileUpdate.model_validate({"displayName": "Al", "photoUrl": "u"})
        )

        assert updated.display_name == "Al"
        assert updated.photo_url == "u"

    async def test_missing_profile_raises(self, service: ProfileService) -> None:
        with pytest.raises(ProfileNotFoundError):
            await service.update("ghost", ProfileUpdate(bio="x"))

    async def test_optional_field_cleared_with_null(self, service: ProfileService) -> None:
        await service.get_or_create(Identity(uid="alice"))
        await service.update("alice", ProfileUpdate(bio="hello"))

        updated = await service.update("alice", ProfileUpdate.model_validate({"bio": None}))

        assert updated.bio is None

    @pytest.mark.parametrize("field", ["displayName", "username"])
    def test_null_for_required_string_rejected(self, field: str) -> None:
        with pytest.raises(ValidationError):
            ProfileUpdate.model_validate({field: None})

    async def test_updated_at_stored_like_created_at(
        self, service: ProfileService, documents: InMemoryDocumentStore
    ) -> None:
        await service.get_or_create(Identity(uid="alice"))

        await service.update("alice", ProfileUpdate(bio="x"))

        doc = await documents.get(COLLECTION, "alice")
        assert doc is not None
        assert doc.data["updatedAt"] == doc.data["createdAt"] == "2024-05-01T12:00:00Z"
