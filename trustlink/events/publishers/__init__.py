"""Event publisher backends."""

from trustlink.events.publishers.inmemory import InMemoryEventPublisher
from trustlink.events.publishers.rabbitmq import RabbitMQEventPublisher

__all__ = [
    "InMemoryEventPublisher",
    "RabbitMQEventPublisher",
]
