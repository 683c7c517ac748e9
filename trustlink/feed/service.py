"""Post creation and the global feed."""

from collections.abc import Callable
from datetime import datetime
from uuid import uuid4

from trustlink.config.models.services import FeedConfig
from trustlink.documents.store import Document, DocumentStore
from trustlink.events.models import PostCreatedEvent, Topic
from trustlink.events.publisher import EventPublisher, publish_best_effort
from trustlink.feed.models import Post, utc_now
from trustlink.observability.logging import get_logger
from trustlink.profile.service import ProfileNotFoundError, ProfileService

logger = get_logger(__name__)

COLLECTION = "posts"


class InvalidPostError(Exception):
    """The post body is empty."""

    pass


def _from_document(doc: Document) -> Post:
    return Post.model_validate({**doc.data, "id": doc.key})


class FeedService:
    """Creates posts and lists the newest ones."""

    def __init__(
        self,
        documents: DocumentStore,
        publisher: EventPublisher,
        profiles: ProfileService,
        config: FeedConfig | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._documents = documents
        self._publisher = publisher
        self._profiles = profiles
        self._config = config or FeedConfig()
        self._clock = clock

    async def create_post(
        self, author_uid: str, text: str, media_urls: list[str] | None = None
    ) -> Post:
        """Store a post and announce it on `post.created`.

        Raises:
            InvalidPostError: If text is blank
            ProfileNotFoundError: If the author has no profile to copy from
        """
        if not text or not text.strip():
            raise InvalidPostError("text is required")

        author = await self._profiles.get(author_uid)
        if author is None:
            raise ProfileNotFoundError(f"Profile {author_uid} not found")

        post = Post(
            id=str(uuid4()),
            author_uid=author_uid,
            author_display_name=author.display_name,
            author_photo_url=author.photo_url,
            text=text,
            media_urls=media_urls or [],
            created_at=self._clock(),
        )
        await self._documents.create(
            COLLECTION, post.id, post.model_dump(mode="json", by_alias=True, exclude={"id"})
        )
        logger.info("post_created", post_id=post.id, author_uid=author_uid)

        event = PostCreatedEvent(
            post_id=post.id, author_uid=author_uid, created_at=post.created_at
        )
        await publish_best_effort(self._publisher, Topic.POST_CREATED, event)
        return post

    def resolve_limit(self, limit: int | None) -> int:
        """Out-of-range or missing limits fall back to the default."""
        if limit is None or limit < 1 or limit > self._config.max_limit:
            return self._config.default_limit
        return limit

    async def list_posts(self, limit: int | None = None) -> list[Post]:
        """Newest posts first."""
        docs = await self._documents.query(COLLECTION)
        posts = sorted(
            (_from_document(doc) for doc in docs),
            key=lambda post: post.created_at,
            reverse=True,
        )
        return posts[: self.resolve_limit(limit)]
