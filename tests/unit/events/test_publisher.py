"""Unit tests for best-effort publishing and the in-memory publisher."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

from trustlink.config.models.events import EventsConfig
from trustlink.events.factory import create_event_publisher
from trustlink.events.models import ConnectionEvent, PostCreatedEvent, Topic
from trustlink.events.publisher import PublishError, publish_best_effort
from trustlink.events.publishers.inmemory import InMemoryEventPublisher

CREATED = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


class TestPublishBestEffort:
    """Tests for publish_best_effort."""

    async def test_success_returns_true(self) -> None:
        publisher = InMemoryEventPublisher()
        event = ConnectionEvent(from_uid="alice", to_uid="bob", created_at=CREATED)

        assert await publish_best_effort(publisher, Topic.CONNECTION_REQUESTED, event) is True
        assert publisher.events == [
            (
                "connection.requested",
                {"fromUid": "alice", "toUid": "bob", "createdAt": "2024-05-01T12:00:00Z"},
            )
        ]

    async def test_failure_is_swallowed(self) -> None:
        """A broker error is reported through the return value only."""
        publisher = AsyncMock()
        publisher.publish.side_effect = PublishError("channel closed")
        event = PostCreatedEvent(post_id="p1", author_uid="alice", created_at=CREATED)

        assert await publish_best_effort(publisher, Topic.POST_CREATED, event) is False
        publisher.publish.assert_awaited_once()

    async def test_unexpected_error_is_swallowed(self) -> None:
        publisher = AsyncMock()
        publisher.publish.side_effect = RuntimeError("boom")
        event = PostCreatedEvent(post_id="p1", author_uid="alice", created_at=CREATED)

        assert await publish_best_effort(publisher, "post.created", event) is False


class TestEventModels:
    """Wire names of the event payloads."""

    def test_post_created_aliases(self) -> None:
        event = PostCreatedEvent(post_id="p1", author_uid="alice", created_at=CREATED)
        assert set(event.model_dump(by_alias=True)) == {"postId", "authorUid", "createdAt"}

    def test_connection_event_parses_wire_names(self) -> None:
        event = ConnectionEvent.model_validate(
            {"fromUid": "a", "toUid": "b", "createdAt": "2024-05-01T12:00:00Z"}
        )
        assert event.from_uid == "a"
        assert event.created_at == CREATED


class TestFactory:
    async def test_inmemory_default(self) -> None:
        publisher = await create_event_publisher(EventsConfig())
        assert isinstance(publisher, InMemoryEventPublisher)
