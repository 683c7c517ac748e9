"""Dependency injection for API routes.

Routes receive services from the ServiceContainer stored on app.state.
Each getter can be replaced through app.dependency_overrides in tests.
"""

from typing import Annotated

from fastapi import Depends, Request

from trustlink.api.container import ServiceContainer
from trustlink.auth.identity import IdentityProvider
from trustlink.connections.store import RelationshipStore
from trustlink.feed.service import FeedService
from trustlink.profile.service import ProfileService


def get_container(request: Request) -> ServiceContainer:
    """Return the container built during application startup."""
    container: ServiceContainer | None = getattr(request.app.state, "container", None)
    if container is None:
        raise RuntimeError("Services not initialized; application lifespan has not run")
    return container


ContainerDep = Annotated[ServiceContainer, Depends(get_container)]


def get_identity_provider(container: ContainerDep) -> IdentityProvider:
    return container.identity


def get_relationship_store(container: ContainerDep) -> RelationshipStore:
    return container.relationships


def get_profile_service(container: ContainerDep) -> ProfileService:
    return container.profiles


def get_feed_service(container: ContainerDep) -> FeedService:
    return container.feed


IdentityProviderDep = Annotated[IdentityProvider, Depends(get_identity_provider)]
RelationshipStoreDep = Annotated[RelationshipStore, Depends(get_relationship_store)]
ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]
FeedServiceDep = Annotated[FeedService, Depends(get_feed_service)]
