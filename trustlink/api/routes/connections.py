"""Connection request, answer and listing endpoints."""

from fastapi import APIRouter, Query

from trustlink.api.dependencies import RelationshipStoreDep
from trustlink.api.exceptions import (
    ForbiddenError,
    InvalidRequestError,
    ResourceConflictError,
    ResourceNotFoundError,
    TrustLinkAPIError,
)
from trustlink.api.middleware.auth import IdentityDep
from trustlink.connections.errors import (
    InvalidRelationshipError,
    InvalidTransitionError,
    RecipientMismatchError,
    RelationshipConflictError,
    RelationshipError,
    RelationshipNotFoundError,
)
from trustlink.connections.models import (
    ConnectionActionBody,
    ConnectionList,
    ConnectionRequestBody,
    Relationship,
    RelationshipStatus,
)
from trustlink.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/connections")

_ERROR_MAP: dict[type[RelationshipError], type[TrustLinkAPIError]] = {
    InvalidRelationshipError: InvalidRequestError,
    RelationshipNotFoundError: ResourceNotFoundError,
    RecipientMismatchError: ForbiddenError,
    InvalidTransitionError: ResourceConflictError,
    RelationshipConflictError: ResourceConflictError,
}


def _to_api_error(error: RelationshipError) -> TrustLinkAPIError:
    """Map a domain error to its HTTP counterpart."""
    for domain_type, api_type in _ERROR_MAP.items():
        if isinstance(error, domain_type):
            return api_type(error.message)
    return TrustLinkAPIError(error.message)


@router.post("/request", response_model=Relationship, status_code=201)
async def request_connection(
    body: ConnectionRequestBody,
    identity: IdentityDep,
    relationships: RelationshipStoreDep,
) -> Relationship:
    """Send a connection request to `targetUid`."""
    try:
        return await relationships.request(identity.uid, body.target_uid)
    except RelationshipError as e:
        raise _to_api_error(e) from e


@router.post("/accept", response_model=Relationship)
async def accept_connection(
    body: ConnectionActionBody,
    identity: IdentityDep,
    relationships: RelationshipStoreDep,
) -> Relationship:
    """Accept the pending request sent by `fromUid`."""
    try:
        return await relationships.accept(identity.uid, body.from_uid)
    except RelationshipError as e:
        raise _to_api_error(e) from e


@router.post("/reject", response_model=Relationship)
async def reject_connection(
    body: ConnectionActionBody,
    identity: IdentityDep,
    relationships: RelationshipStoreDep,
) -> Relationship:
    """Reject the pending request sent by `fromUid`."""
    try:
        return await relationships.reject(identity.uid, body.from_uid)
    except RelationshipError as e:
        raise _to_api_error(e) from e


@router.get("", response_model=ConnectionList)
async def list_connections(
    identity: IdentityDep,
    relationships: RelationshipStoreDep,
    status: str = Query(default=RelationshipStatus.ACCEPTED.value),
) -> ConnectionList:
    """List the caller's relationships in `status` (accepted by default).

    Args:
        identity: Authenticated caller
        relationships: Relationship store
        status: One of requested, accepted, rejected; any other value
            matches nothing

    Returns:
        Relationships where the caller is either party
    """
    try:
        wanted = RelationshipStatus(status)
    except ValueError:
        logger.debug("connections_unknown_status", status=status)
        return ConnectionList()

    try:
        found = await relationships.list_connections(identity.uid, wanted)
    except RelationshipError as e:
        raise _to_api_error(e) from e

    logger.debug("connections_listed", status=wanted.value, count=len(found))
    return ConnectionList(connections=found, count=len(found))
