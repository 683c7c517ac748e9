"""EventPublisher abstract interface and best-effort helper."""

from abc import ABC, abstractmethod

from pydantic import BaseModel

from trustlink.events.models import Topic
from trustlink.observability.logging import get_logger
from trustlink.observability.metrics import EVENTS_FAILED, EVENTS_PUBLISHED

logger = get_logger(__name__)


class PublishError(Exception):
    """Raised when the broker does not accept an event."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class EventPublisher(ABC):
    """Abstract interface for topic publishing.

    Delivery is at-least-once once the broker has accepted the message;
    nothing beyond local acceptance is reported back.
    """

    @abstractmethod
    async def publish(self, topic: Topic | str, payload: BaseModel) -> None:
        """Publish a payload under a routing key.

        Raises:
            PublishError: If the broker rejects or cannot be reached
        """
        pass

    async def close(self) -> None:
        """Release broker resources."""
        return None


async def publish_best_effort(
    publisher: EventPublisher,
    topic: Topic | str,
    payload: BaseModel,
) -> bool:
    """Publish an event after a durable write.

    Failures are logged and counted, never raised: the write that produced
    the event has already succeeded.

    Returns:
        True if the broker accepted the event
    """
    topic_name = topic.value if isinstance(topic, Topic) else topic
    try:
        await publisher.publish(topic, payload)
    except Exception as e:
        EVENTS_FAILED.labels(topic=topic_name).inc()
        logger.warning(
            "event_publish_failed",
            topic=topic_name,
            error=str(e),
            error_type=type(e).__name__,
        )
        return False

    EVENTS_PUBLISHED.labels(topic=topic_name).inc()
    return True
