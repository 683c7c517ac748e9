"""Event dispatch for the notification consumer.

Events carry no type field; the kind is sniffed from the payload:
`postId` means post.created, otherwise `fromUid` means a connection event.
Delivery to devices is not implemented; handlers only log.
"""

import json
from enum import Enum
from typing import Any

from trustlink.events.models import ConnectionEvent, PostCreatedEvent
from trustlink.observability.logging import get_logger
from trustlink.observability.metrics import EVENTS_CONSUMED

logger = get_logger(__name__)


class EventKind(str, Enum):
    """Dispatch outcome of a message."""

    POST = "post"
    CONNECTION = "connection"
    UNKNOWN = "unknown"


def classify(payload: Any) -> EventKind:
    """Decide which handler a decoded payload belongs to."""
    if not isinstance(payload, dict):
        return EventKind.UNKNOWN
    if payload.get("postId"):
        return EventKind.POST
    if payload.get("fromUid"):
        return EventKind.CONNECTION
    return EventKind.UNKNOWN


async def handle_post_created(event: PostCreatedEvent) -> None:
    logger.info("handling_post_created", post_id=event.post_id, author_uid=event.author_uid)
    # TODO: fan out push notifications to the author's accepted connections


async def handle_connection_event(event: ConnectionEvent) -> None:
    logger.info("handling_connection_event", from_uid=event.from_uid, to_uid=event.to_uid)
    # TODO: push a notification to event.to_uid


async def handle_event(body: bytes) -> EventKind:
    """Decode and dispatch one message body.

    Unknown payloads are logged and treated as handled.

    Raises:
        ValueError: If the body is not valid JSON or fails validation
    """
    try:
        payload = json.loads(body)
    except json.JSONDecodeError as e:
        logger.error("event_parse_failed", error=str(e))
        EVENTS_CONSUMED.labels(kind=EventKind.UNKNOWN.value, outcome="error").inc()
        raise

    kind = classify(payload)
    if kind == EventKind.POST:
        await handle_post_created(PostCreatedEvent.model_validate(payload))
    elif kind == EventKind.CONNECTION:
        await handle_connection_event(ConnectionEvent.model_validate(payload))
    else:
        logger.warning("unknown_event_type", body=body.decode(errors="replace")[:512])

    EVENTS_CONSUMED.labels(kind=kind.value, outcome="ok").inc()
    return kind
