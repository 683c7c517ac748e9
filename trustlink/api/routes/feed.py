"""Post creation and the latest-posts feed."""

from fastapi import APIRouter, Query

from trustlink.api.dependencies import FeedServiceDep
from trustlink.api.exceptions import InvalidRequestError, ResourceNotFoundError
from trustlink.api.middleware.auth import IdentityDep
from trustlink.feed.models import CreatePostBody, Post, PostList
from trustlink.feed.service import InvalidPostError
from trustlink.profile.service import ProfileNotFoundError

router = APIRouter(prefix="/posts")


def _parse_limit(raw: str | None) -> int | None:
    """Non-numeric limits are ignored rather than rejected."""
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


@router.post("", response_model=Post, status_code=201, response_model_exclude_none=True)
async def create_post(body: CreatePostBody, identity: IdentityDep, feed: FeedServiceDep) -> Post:
    """Publish a post as the caller."""
    try:
        return await feed.create_post(identity.uid, body.text, body.media_urls)
    except InvalidPostError as e:
        raise InvalidRequestError(str(e)) from e
    except ProfileNotFoundError as e:
        raise ResourceNotFoundError("Author profile not found") from e


@router.get("", response_model=PostList, response_model_exclude_none=True)
async def list_posts(
    identity: IdentityDep,
    feed: FeedServiceDep,
    limit: str | None = Query(default=None),
) -> PostList:
    """Newest posts first, at most `limit` (1-100, default 20)."""
    posts = await feed.list_posts(_parse_limit(limit))
    return PostList(posts=posts, count=len(posts))
