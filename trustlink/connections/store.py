"""Relationship state machine over a document store.

    [none] --request(from, to)--> requested
    requested --accept(to, from)--> accepted
    requested --reject(to, from)--> rejected
    rejected --request(from, to)--> requested   (original initiator only)

Accepted is terminal. Transitions are compare-and-swap writes on the
document version; a lost race re-reads and re-evaluates, so racing
callers converge on the same state. Events are published after the write
and never affect its outcome.
"""

from collections.abc import Callable
from datetime import datetime

from trustlink.config.models.services import ConnectionsConfig
from trustlink.connections.errors import (
    InvalidRelationshipError,
    InvalidTransitionError,
    RecipientMismatchError,
    RelationshipConflictError,
    RelationshipNotFoundError,
)
from trustlink.connections.ids import relationship_id
from trustlink.connections.models import Relationship, RelationshipStatus, utc_now
from trustlink.documents.errors import ConflictError, NotFoundError
from trustlink.documents.store import Document, DocumentStore, timestamp
from trustlink.events.models import ConnectionEvent, Topic
from trustlink.events.publisher import EventPublisher, publish_best_effort
from trustlink.observability.logging import get_logger
from trustlink.observability.metrics import CAS_CONFLICTS, RELATIONSHIP_TRANSITIONS

logger = get_logger(__name__)

COLLECTION = "relationships"


def _to_data(relationship: Relationship) -> dict:
    return relationship.model_dump(mode="json", by_alias=True, exclude={"id"})


def _from_document(doc: Document) -> Relationship:
    return Relationship.model_validate({**doc.data, "id": doc.key})


def _require(value: str, field: str) -> None:
    if not value or not value.strip():
        raise InvalidRelationshipError(f"{field} is required")


def _is_pair(relationship: Relationship, uid_a: str, uid_b: str) -> bool:
    # distinct pairs can share an id when a uid contains the separator
    return {relationship.from_id, relationship.to_id} == {uid_a, uid_b}


class RelationshipStore:
    """Owns the relationship lifecycle.

    All state lives in the injected DocumentStore; the instance itself is
    stateless and safe to share across requests.
    """

    def __init__(
        self,
        documents: DocumentStore,
        publisher: EventPublisher,
        config: ConnectionsConfig | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize the store.

        Args:
            documents: Persistence backend
            publisher: Output channel for connection events
            config: Recipient check and CAS settings (defaults if omitted)
            clock: Source of timestamps
        """
        self._documents = documents
        self._publisher = publisher
        self._config = config or ConnectionsConfig()
        self._clock = clock

    async def request(self, from_id: str, to_id: str) -> Relationship:
        """Propose a connection from from_id to to_id.

        A repeated request by the same initiator is idempotent while
        pending and re-opens the pair after a rejection.

        Raises:
            InvalidRelationshipError: Missing ids or from_id == to_id
            RelationshipConflictError: The pair is accepted, or the target
                already has a request open toward from_id
        """
        _require(from_id, "fromUid")
        _require(to_id, "targetUid")
        if from_id == to_id:
            raise InvalidRelationshipError("Cannot connect with yourself")

        rel_id = relationship_id(from_id, to_id)

        for _ in range(self._config.max_cas_attempts):
            now = self._clock()
            relationship = Relationship(
                id=rel_id,
                from_id=from_id,
                to_id=to_id,
                status=RelationshipStatus.REQUESTED,
                created_at=now,
                updated_at=now,
            )
            try:
                await self._documents.create(COLLECTION, rel_id, _to_data(relationship))
            except ConflictError:
                existing = await self._documents.get(COLLECTION, rel_id)
                if existing is None:
                    continue
                result = await self._rerequest(existing, from_id, to_id)
                if result is None:
                    CAS_CONFLICTS.inc()
                    continue
                return result

            RELATIONSHIP_TRANSITIONS.labels(status=RelationshipStatus.REQUESTED.value).inc()
            logger.info("connection_requested", from_uid=from_id, to_uid=to_id)
            await self._publish(Topic.CONNECTION_REQUESTED, from_id, to_id, now)
            return relationship

        raise RelationshipConflictError("Relationship is being modified concurrently")

    async def _rerequest(
        self, existing: Document, from_id: str, to_id: str
    ) -> Relationship | None:
        """Apply a request to an existing pair; None means the CAS lost."""
        current = _from_document(existing)

        if not _is_pair(current, from_id, to_id):
            logger.warning("connection_id_collision", relationship_id=current.id)
            raise RelationshipConflictError("Connection id is held by another pair")
        if current.status == RelationshipStatus.ACCEPTED:
            raise RelationshipConflictError("Already connected")
        if current.from_id != from_id:
            raise RelationshipConflictError(
                "The target already sent you a connection request"
                if current.status == RelationshipStatus.REQUESTED
                else "The target has rejected a connection with you"
            )
        if current.status == RelationshipStatus.REQUESTED:
            logger.debug("connection_request_repeated", from_uid=from_id, to_uid=to_id)
            return current

        now = self._clock()
        try:
            updated = await self._documents.update(
                COLLECTION,
                current.id,
                {
                    "status": RelationshipStatus.REQUESTED.value,
                    "updatedAt": timestamp(now),
                },
                expected_version=existing.version,
            )
        except ConflictError:
            return None

        RELATIONSHIP_TRANSITIONS.labels(status=RelationshipStatus.REQUESTED.value).inc()
        logger.info("connection_rerequested", from_uid=from_id, to_uid=to_id)
        await self._publish(Topic.CONNECTION_REQUESTED, from_id, to_id, now)
        return _from_document(updated)

    async def accept(self, acting_id: str, from_id: str) -> Relationship:
        """Accept the request from_id sent to acting_id.

        Accepting an already accepted pair succeeds without a new event.

        Raises:
            InvalidRelationshipError: Missing from_id
            RelationshipNotFoundError: No relationship for the pair
            RecipientMismatchError: acting_id is not the stored recipient
                (only when recipient verification is enabled)
            InvalidTransitionError: The pair was rejected
        """
        relationship, changed = await self._transition(
            acting_id, from_id, RelationshipStatus.ACCEPTED
        )
        if changed:
            logger.info("connection_accepted", from_uid=from_id, to_uid=acting_id)
            await self._publish(Topic.CONNECTION_ACCEPTED, from_id, acting_id, self._clock())
        return relationship

    async def reject(self, acting_id: str, from_id: str) -> Relationship:
        """Reject the request from_id sent to acting_id. Publishes nothing.

        Raises:
            Same as accept, with InvalidTransitionError for accepted pairs
        """
        relationship, changed = await self._transition(
            acting_id, from_id, RelationshipStatus.REJECTED
        )
        if changed:
            logger.info("connection_rejected", from_uid=from_id, to_uid=acting_id)
        return relationship

    async def _transition(
        self,
        acting_id: str,
        from_id: str,
        target: RelationshipStatus,
    ) -> tuple[Relationship, bool]:
        _require(acting_id, "uid")
        _require(from_id, "fromUid")
        rel_id = relationship_id(from_id, acting_id)

        for _ in range(self._config.max_cas_attempts):
            doc = await self._documents.get(COLLECTION, rel_id)
            if doc is None:
                raise RelationshipNotFoundError(f"No connection request from {from_id}")

            current = _from_document(doc)
            if not _is_pair(current, from_id, acting_id):
                raise RelationshipNotFoundError(f"No connection request from {from_id}")
            if self._config.verify_recipient and current.to_id != acting_id:
                logger.warning(
                    "connection_recipient_mismatch",
                    relationship_id=rel_id,
                    acting_uid=acting_id,
                )
                raise RecipientMismatchError("Only the recipient can answer a connection request")

            if current.status == target:
                return current, False
            if current.status != RelationshipStatus.REQUESTED:
                raise InvalidTransitionError(
                    f"Cannot change a {current.status.value} connection to {target.value}"
                )

            try:
                updated = await self._documents.update(
                    COLLECTION,
                    rel_id,
                    {"status": target.value, "updatedAt": timestamp(self._clock())},
                    expected_version=doc.version,
                )
            except NotFoundError as e:
                raise RelationshipNotFoundError(f"No connection request from {from_id}") from e
            except ConflictError:
                CAS_CONFLICTS.inc()
                logger.debug("connection_cas_conflict", relationship_id=rel_id)
                continue

            RELATIONSHIP_TRANSITIONS.labels(status=target.value).inc()
            return _from_document(updated), True

        raise RelationshipConflictError("Relationship is being modified concurrently")

    async def list_connections(
        self,
        acting_id: str,
        status: RelationshipStatus = RelationshipStatus.ACCEPTED,
    ) -> list[Relationship]:
        """Relationships in `status` where acting_id is either party.

        The two halves are concatenated without a defined order.
        """
        _require(acting_id, "uid")
        sent = await self._documents.query(COLLECTION, fromUid=acting_id, status=status.value)
        received = await self._documents.query(COLLECTION, toUid=acting_id, status=status.value)
        return [_from_document(doc) for doc in [*sent, *received]]

    async def get(self, uid_a: str, uid_b: str) -> Relationship | None:
        """Look up the relationship for a pair, in either order."""
        doc = await self._documents.get(COLLECTION, relationship_id(uid_a, uid_b))
        if doc is None:
            return None
        relationship = _from_document(doc)
        return relationship if _is_pair(relationship, uid_a, uid_b) else None

    async def _publish(
        self, topic: Topic, from_id: str, to_id: str, created_at: datetime
    ) -> None:
        event = ConnectionEvent(from_uid=from_id, to_uid=to_id, created_at=created_at)
        await publish_best_effort(self._publisher, topic, event)
