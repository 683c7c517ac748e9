"""Bearer authentication dependency for API requests."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from trustlink.api.dependencies import IdentityProviderDep
from trustlink.api.exceptions import UnauthenticatedError
from trustlink.api.middleware.context import update_request_context
from trustlink.auth.identity import AuthenticationError, Identity
from trustlink.observability.logging import get_logger

logger = get_logger(__name__)

# Security scheme for OpenAPI docs
security_scheme = HTTPBearer(auto_error=False)


async def get_identity(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security_scheme)],
    provider: IdentityProviderDep,
) -> Identity:
    """Verify the bearer token and return the caller's identity.

    Raises:
        UnauthenticatedError: 401 if the header is missing, not a bearer
            credential, or rejected by the identity provider
    """
    if credentials is None or not credentials.credentials:
        logger.warning("auth_missing_token", path=request.url.path)
        raise UnauthenticatedError("Missing Authorization header")

    try:
        identity = await provider.verify(credentials.credentials)
    except AuthenticationError as e:
        logger.warning("auth_invalid_token", error=str(e), path=request.url.path)
        raise UnauthenticatedError("Invalid or expired token") from None

    update_request_context(uid=identity.uid)
    logger.debug("auth_success", uid=identity.uid, path=request.url.path)
    return identity


IdentityDep = Annotated[Identity, Depends(get_identity)]
