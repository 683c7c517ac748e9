"""In-memory EventPublisher that records published events."""

from typing import Any

from pydantic import BaseModel

from trustlink.events.models import Topic
from trustlink.events.publisher import EventPublisher


class InMemoryEventPublisher(EventPublisher):
    """Keeps published events in a list for tests and local development."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    async def publish(self, topic: Topic | str, payload: BaseModel) -> None:
        topic_name = topic.value if isinstance(topic, Topic) else topic
        self.events.append((topic_name, payload.model_dump(mode="json", by_alias=True)))

    def topics(self) -> list[str]:
        """Routing keys in publish order."""
        return [topic for topic, _ in self.events]
