"""Development identity provider."""

from trustlink.auth.identity import AuthenticationError, Identity, IdentityProvider


class StaticIdentityProvider(IdentityProvider):
    """Treats the bearer token itself as the uid.

    Only for local development and tests; never enable in production.
    """

    async def verify(self, token: str) -> Identity:
        uid = token.strip()
        if not uid:
            raise AuthenticationError("Empty token")
        return Identity(uid=uid)
