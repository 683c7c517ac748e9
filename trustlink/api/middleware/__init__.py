"""API middleware package."""

from trustlink.api.middleware.auth import IdentityDep, get_identity, security_scheme
from trustlink.api.middleware.context import (
    RequestContextMiddleware,
    get_request_context,
    set_request_context,
    update_request_context,
)

__all__ = [
    "IdentityDep",
    "RequestContextMiddleware",
    "get_identity",
    "get_request_context",
    "security_scheme",
    "set_request_context",
    "update_request_context",
]
