"""RabbitMQ implementation of EventPublisher using aio-pika.

Messages are JSON, persistent, and routed through a durable topic
exchange keyed by the event topic.
"""

from datetime import UTC, datetime

import aio_pika
from aio_pika.abc import AbstractChannel, AbstractExchange, AbstractRobustConnection
from pydantic import BaseModel

from trustlink.config.models.events import EventsConfig
from trustlink.events.models import Topic
from trustlink.events.publisher import EventPublisher, PublishError
from trustlink.observability.logging import get_logger

logger = get_logger(__name__)


async def declare_exchange(channel: AbstractChannel, name: str) -> AbstractExchange:
    """Declare the durable topic exchange shared by publishers and consumers."""
    return await channel.declare_exchange(name, aio_pika.ExchangeType.TOPIC, durable=True)


class RabbitMQEventPublisher(EventPublisher):
    """Publishes domain events to a topic exchange."""

    def __init__(
        self,
        connection: AbstractRobustConnection,
        exchange: AbstractExchange,
    ) -> None:
        self._connection = connection
        self._exchange = exchange

    @classmethod
    async def connect(cls, config: EventsConfig) -> "RabbitMQEventPublisher":
        """Connect to the broker and declare the exchange."""
        connection = await aio_pika.connect_robust(config.url)
        channel = await connection.channel()
        exchange = await declare_exchange(channel, config.exchange)
        logger.info("rabbitmq_publisher_connected", exchange=config.exchange)
        return cls(connection, exchange)

    async def publish(self, topic: Topic | str, payload: BaseModel) -> None:
        routing_key = topic.value if isinstance(topic, Topic) else topic
        body = payload.model_dump_json(by_alias=True).encode()
        message = aio_pika.Message(
            body=body,
            content_type="application/json",
            delivery_mode=aio_pika.DeliveryMode.PERSISTENT,
            timestamp=datetime.now(UTC),
        )
        try:
            await self._exchange.publish(message, routing_key=routing_key)
        except (aio_pika.AMQPException, ConnectionError) as e:
            raise PublishError(f"Failed to publish {routing_key}: {e}", cause=e) from e

        logger.debug("event_published", routing_key=routing_key, size=len(body))

    async def close(self) -> None:
        await self._connection.close()
