"""Domain events: payloads, publishing and consumption."""

from trustlink.events.models import ConnectionEvent, PostCreatedEvent, Topic
from trustlink.events.publisher import EventPublisher, PublishError, publish_best_effort

__all__ = [
    "ConnectionEvent",
    "EventPublisher",
    "PostCreatedEvent",
    "PublishError",
    "Topic",
    "publish_best_effort",
]
