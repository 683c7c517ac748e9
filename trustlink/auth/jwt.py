"""JWT identity provider using python-jose."""

from jose import JWTError, jwt

from trustlink.auth.identity import AuthenticationError, Identity, IdentityProvider
from trustlink.config.models.auth import AuthConfig
from trustlink.observability.logging import get_logger

logger = get_logger(__name__)


class JWTIdentityProvider(IdentityProvider):
    """Verifies signed JWTs and maps standard claims to an Identity.

    The subject comes from `sub`, falling back to `user_id` and `uid` as
    issued by some identity services.
    """

    def __init__(
        self,
        key: str,
        algorithms: list[str],
        audience: str | None = None,
        issuer: str | None = None,
    ) -> None:
        self._key = key
        self._algorithms = algorithms
        self._audience = audience
        self._issuer = issuer

    @classmethod
    def from_config(cls, config: AuthConfig) -> "JWTIdentityProvider":
        if not config.jwt_key:
            raise RuntimeError("TRUSTLINK_AUTH__JWT_KEY is not set")
        return cls(
            key=config.jwt_key,
            algorithms=config.algorithms,
            audience=config.audience,
            issuer=config.issuer,
        )

    async def verify(self, token: str) -> Identity:
        try:
            claims = jwt.decode(
                token,
                self._key,
                algorithms=self._algorithms,
                audience=self._audience,
                issuer=self._issuer,
                options={"verify_aud": self._audience is not None},
            )
        except JWTError as e:
            logger.debug("jwt_rejected", error=str(e))
            raise AuthenticationError("Invalid or expired token") from e

        uid = claims.get("sub") or claims.get("user_id") or claims.get("uid")
        if not uid:
            raise AuthenticationError("Token missing subject claim")

        return Identity(
            uid=str(uid),
            email=claims.get("email"),
            name=claims.get("name"),
            picture=claims.get("picture"),
        )
