"""Prefix-table reverse proxy over httpx."""

from collections.abc import Mapping
from dataclasses import dataclass

import httpx
from fastapi import Request, Response

from trustlink.api.exceptions import UpstreamError
from trustlink.config.models.gateway import GatewayConfig
from trustlink.observability.logging import get_logger
from trustlink.observability.metrics import GATEWAY_REQUESTS

logger = get_logger(__name__)

# RFC 9110 section 7.6.1 connection-specific headers
HOP_BY_HOP_HEADERS = frozenset({
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailer",
    "transfer-encoding",
    "upgrade",
})


@dataclass(frozen=True)
class Route:
    """Requests under `prefix` go to `upstream`."""

    name: str
    prefix: str
    upstream: str

    def matches(self, path: str) -> bool:
        return path == self.prefix or path.startswith(self.prefix + "/")


def build_routes(config: GatewayConfig) -> list[Route]:
    return [
        Route("profile", "/v1/profile", config.profile_url),
        Route("feed", "/v1/posts", config.feed_url),
        Route("connections", "/v1/connections", config.connections_url),
    ]


def filter_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Drop hop-by-hop headers, including any listed in Connection."""
    items = list(headers.items())
    listed = {
        token.strip().lower()
        for name, value in items
        if name.lower() == "connection"
        for token in value.split(",")
    }
    return {
        name: value
        for name, value in items
        if name.lower() not in HOP_BY_HOP_HEADERS
        and name.lower() not in listed
        and name.lower() != "host"
    }


class ReverseProxy:
    """Forwards a request verbatim to the first route whose prefix matches.

    Path, query, method, headers and body are passed through; the
    upstream's status, headers and body come back unchanged apart from
    hop-by-hop headers.
    """

    def __init__(self, routes: list[Route], client: httpx.AsyncClient) -> None:
        self._routes = routes
        self._client = client

    def match(self, path: str) -> Route | None:
        for route in self._routes:
            if route.matches(path):
                return route
        return None

    async def forward(self, route: Route, request: Request) -> Response:
        """Send `request` to `route.upstream`.

        Raises:
            UpstreamError: If the upstream cannot be reached or times out
        """
        url = httpx.URL(route.upstream.rstrip("/") + request.url.path)
        if request.url.query:
            url = url.copy_with(query=request.url.query.encode())

        headers = filter_headers(request.headers)
        headers["X-Forwarded-Host"] = request.headers.get("host", "")
        if request.client:
            headers["X-Forwarded-For"] = request.client.host

        try:
            upstream = await self._client.request(
                request.method,
                url,
                headers=headers,
                content=await request.body(),
            )
        except httpx.HTTPError as e:
            GATEWAY_REQUESTS.labels(upstream=route.name, status="error").inc()
            logger.error(
                "gateway_upstream_failed",
                upstream=route.name,
                path=request.url.path,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise UpstreamError(f"{route.name} service unavailable") from e

        GATEWAY_REQUESTS.labels(upstream=route.name, status=str(upstream.status_code)).inc()
        logger.debug(
            "gateway_forwarded",
            upstream=route.name,
            method=request.method,
            path=request.url.path,
            status_code=upstream.status_code,
        )
        response_headers = filter_headers(upstream.headers)
        response_headers.pop("content-length", None)
        response_headers.pop("content-encoding", None)
        return Response(
            content=upstream.content,
            status_code=upstream.status_code,
            headers=response_headers,
        )
