"""Event publisher factory."""

from trustlink.config.models.events import EventsConfig
from trustlink.events.publisher import EventPublisher
from trustlink.events.publishers.inmemory import InMemoryEventPublisher
from trustlink.events.publishers.rabbitmq import RabbitMQEventPublisher


async def create_event_publisher(config: EventsConfig) -> EventPublisher:
    """Create the configured publisher backend, connecting if needed."""
    if config.backend == "rabbitmq":
        return await RabbitMQEventPublisher.connect(config)
    return InMemoryEventPublisher()
