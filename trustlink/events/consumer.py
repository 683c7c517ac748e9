"""RabbitMQ consumer for domain events.

Binds a durable queue to the topic exchange and hands each message body
to an async handler. Successful handling acks the message; any handler
error nacks it with requeue.
"""

from collections.abc import Awaitable, Callable
from typing import Any

import aio_pika
from aio_pika.abc import AbstractIncomingMessage, AbstractQueue, AbstractRobustConnection

from trustlink.config.models.events import EventsConfig
from trustlink.events.publishers.rabbitmq import declare_exchange
from trustlink.observability.logging import get_logger

logger = get_logger(__name__)

MessageHandler = Callable[[bytes], Awaitable[Any]]


async def process_message(message: AbstractIncomingMessage, handler: MessageHandler) -> bool:
    """Run the handler for one delivery and settle it.

    Returns:
        True if the message was acked
    """
    logger.debug("message_received", routing_key=message.routing_key)
    try:
        await handler(message.body)
    except Exception as e:
        logger.error(
            "message_handling_failed",
            routing_key=message.routing_key,
            error=str(e),
            error_type=type(e).__name__,
        )
        await message.nack(requeue=True)
        return False

    await message.ack()
    return True


class RabbitMQConsumer:
    """Consumes the notification queue."""

    def __init__(self, config: EventsConfig) -> None:
        self._config = config
        self._connection: AbstractRobustConnection | None = None
        self._queue: AbstractQueue | None = None
        self._consumer_tag: str | None = None

    async def start(self, handler: MessageHandler) -> None:
        """Connect, declare and bind the queue, and begin consuming."""
        self._connection = await aio_pika.connect_robust(self._config.url)
        channel = await self._connection.channel()
        exchange = await declare_exchange(channel, self._config.exchange)
        await channel.set_qos(prefetch_count=self._config.prefetch_count)

        self._queue = await channel.declare_queue(self._config.queue, durable=True)
        for routing_key in self._config.routing_keys:
            await self._queue.bind(exchange, routing_key=routing_key)
            logger.info("queue_bound", queue=self._config.queue, routing_key=routing_key)

        async def on_message(message: AbstractIncomingMessage) -> None:
            await process_message(message, handler)

        self._consumer_tag = await self._queue.consume(on_message)
        logger.info("consumer_started", queue=self._config.queue)

    async def close(self) -> None:
        """Stop consuming and close the connection."""
        if self._queue is not None and self._consumer_tag is not None:
            await self._queue.cancel(self._consumer_tag)
        if self._connection is not None:
            await self._connection.close()
        logger.info("consumer_stopped", queue=self._config.queue)
