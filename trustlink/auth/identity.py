"""Identity model and IdentityProvider interface."""

from abc import ABC, abstractmethod

from pydantic import BaseModel, Field


class AuthenticationError(Exception):
    """Raised when a bearer credential cannot be verified."""

    pass


class Identity(BaseModel):
    """A verified caller.

    `uid` is opaque; callers never interpret it beyond equality.
    """

    uid: str = Field(..., min_length=1, description="Stable subject identifier")
    email: str | None = Field(default=None, description="E-mail claim")
    name: str | None = Field(default=None, description="Display name claim")
    picture: str | None = Field(default=None, description="Photo URL claim")


class IdentityProvider(ABC):
    """Verifies bearer credentials issued by an external identity service."""

    @abstractmethod
    async def verify(self, token: str) -> Identity:
        """Verify a credential and return the caller's identity.

        Raises:
            AuthenticationError: If the token is invalid, expired or
                carries no subject
        """
        pass
