"""Notification consumer entrypoint.

Run with `trustlink-notifications` or `python -m trustlink.notifications`.
"""

import asyncio
import signal

from trustlink.config import get_settings
from trustlink.events.consumer import RabbitMQConsumer
from trustlink.notifications.handlers import handle_event
from trustlink.observability.logging import get_logger, setup_logging

logger = get_logger(__name__)


async def run(stop: asyncio.Event | None = None) -> None:
    """Consume until `stop` is set or SIGINT/SIGTERM arrives."""
    settings = get_settings()
    log_config = settings.observability.logging
    setup_logging(level=log_config.level, format=log_config.format, redact_pii=log_config.redact_pii)

    stop = stop or asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop.set)

    consumer = RabbitMQConsumer(settings.events)
    await consumer.start(handle_event)
    logger.info("notification_service_started", queue=settings.events.queue)

    try:
        await stop.wait()
    finally:
        logger.info("notification_service_stopping")
        await consumer.close()


def main() -> None:
    asyncio.run(run())
