"""Feed domain models."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


class Post(BaseModel):
    """A post with its author's display fields copied in at creation."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Post identifier")
    author_uid: str = Field(..., alias="authorUid")
    author_display_name: str = Field(default="", alias="authorDisplayName")
    author_photo_url: str | None = Field(default=None, alias="authorPhotoUrl")
    text: str = Field(...)
    media_urls: list[str] = Field(default_factory=list, alias="mediaUrls")
    created_at: datetime = Field(..., alias="createdAt")


class CreatePostBody(BaseModel):
    """Body of POST /v1/posts."""

    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(default="")
    media_urls: list[str] = Field(default_factory=list, alias="mediaUrls")


class PostList(BaseModel):
    """Response of GET /v1/posts."""

    posts: list[Post] = Field(default_factory=list)
    count: int = Field(default=0, ge=0)
