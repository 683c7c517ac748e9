"""Profile domain models."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


class Profile(BaseModel):
    """A user's public profile, keyed by uid."""

    model_config = ConfigDict(populate_by_name=True)

    uid: str = Field(..., description="Owner uid")
    display_name: str = Field(default="", alias="displayName")
    username: str = Field(default="")
    email: str = Field(default="")
    photo_url: str | None = Field(default=None, alias="photoUrl")
    profession: str | None = Field(default=None)
    birthday: str | None = Field(default=None)
    gender: str | None = Field(default=None)
    location: str | None = Field(default=None)
    bio: str | None = Field(default=None)
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")


class ProfileUpdate(BaseModel):
    """Partial update; only fields present in the request are applied.

    displayName and username cannot be cleared with null; the optional
    fields can.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    display_name: str = Field(default="", alias="displayName")
    username: str = Field(default="")
    photo_url: str | None = Field(default=None, alias="photoUrl")
    profession: str | None = Field(default=None)
    birthday: str | None = Field(default=None)
    gender: str | None = Field(default=None)
    location: str | None = Field(default=None)
    bio: str | None = Field(default=None)
