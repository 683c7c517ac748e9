"""Profile reads and updates."""

from collections.abc import Callable
from datetime import datetime

from trustlink.auth.identity import Identity
from trustlink.documents.errors import ConflictError, NotFoundError
from trustlink.documents.store import Document, DocumentStore, timestamp
from trustlink.observability.logging import get_logger
from trustlink.profile.models import Profile, ProfileUpdate, utc_now

logger = get_logger(__name__)

COLLECTION = "users"


class ProfileNotFoundError(Exception):
    """No profile document exists for the uid."""

    pass


def _from_document(doc: Document) -> Profile:
    return Profile.model_validate({**doc.data, "uid": doc.key})


class ProfileService:
    """Profile documents in the `users` collection."""

    def __init__(
        self,
        documents: DocumentStore,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._documents = documents
        self._clock = clock

    async def get(self, uid: str) -> Profile | None:
        doc = await self._documents.get(COLLECTION, uid)
        return _from_document(doc) if doc else None

    async def get_or_create(self, identity: Identity) -> Profile:
        """Return the caller's profile, creating it from token claims on first access."""
        profile = await self.get(identity.uid)
        if profile is not None:
            return profile

        now = self._clock()
        profile = Profile(
            uid=identity.uid,
            display_name=identity.name or "",
            email=identity.email or "",
            photo_url=identity.picture,
            created_at=now,
            updated_at=now,
        )
        data = profile.model_dump(mode="json", by_alias=True, exclude={"uid"})
        try:
            await self._documents.create(COLLECTION, identity.uid, data)
        except ConflictError:
            # created by a concurrent first request
            existing = await self.get(identity.uid)
            if existing is not None:
                return existing
            raise

        logger.info("profile_created", uid=identity.uid)
        return profile

    async def update(self, uid: str, changes: ProfileUpdate) -> Profile:
        """Apply the fields set on `changes` and bump updatedAt.

        Raises:
            ProfileNotFoundError: If the profile was never created
        """
        fields = changes.model_dump(mode="json", by_alias=True, exclude_unset=True)
        fields["updatedAt"] = timestamp(self._clock())
        try:
            doc = await self._documents.update(COLLECTION, uid, fields)
        except NotFoundError as e:
            raise ProfileNotFoundError(f"Profile {uid} not found") from e

        logger.info("profile_updated", uid=uid, fields=sorted(fields))
        return _from_document(doc)
