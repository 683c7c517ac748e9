"""Explicit construction of the clients and services a process needs.

Everything that touches the network is built once here, in the app
lifespan, and passed down; nothing is created lazily behind a global.
"""

from dataclasses import dataclass

from trustlink.auth import IdentityProvider, create_identity_provider
from trustlink.config.settings import Settings
from trustlink.connections.store import RelationshipStore
from trustlink.documents.factory import create_document_store
from trustlink.documents.store import DocumentStore
from trustlink.events.factory import create_event_publisher
from trustlink.events.publisher import EventPublisher
from trustlink.feed.service import FeedService
from trustlink.observability.logging import get_logger
from trustlink.profile.service import ProfileService

logger = get_logger(__name__)


@dataclass
class ServiceContainer:
    """Backends and the services built on them."""

    settings: Settings
    documents: DocumentStore
    publisher: EventPublisher
    identity: IdentityProvider
    relationships: RelationshipStore
    profiles: ProfileService
    feed: FeedService

    @classmethod
    def from_components(
        cls,
        settings: Settings,
        documents: DocumentStore,
        publisher: EventPublisher,
        identity: IdentityProvider,
    ) -> "ServiceContainer":
        """Wire services over already constructed backends."""
        profiles = ProfileService(documents)
        return cls(
            settings=settings,
            documents=documents,
            publisher=publisher,
            identity=identity,
            relationships=RelationshipStore(documents, publisher, settings.connections),
            profiles=profiles,
            feed=FeedService(documents, publisher, profiles, settings.feed),
        )

    @classmethod
    async def build(cls, settings: Settings) -> "ServiceContainer":
        """Create backends from settings and wire the services.

        Raises:
            RuntimeError: If the identity provider is misconfigured
        """
        identity = create_identity_provider(settings.auth)
        documents = create_document_store(settings.storage)
        try:
            publisher = await create_event_publisher(settings.events)
        except Exception:
            await documents.close()
            raise

        logger.info(
            "services_built",
            storage=settings.storage.backend,
            events=settings.events.backend,
            auth=settings.auth.provider,
        )
        return cls.from_components(settings, documents, publisher, identity)

    async def close(self) -> None:
        """Close the broker connection and the document store."""
        await self.publisher.close()
        await self.documents.close()
        logger.info("services_closed")
