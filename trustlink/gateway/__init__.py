"""Forwarding gateway in front of the profile, feed and connections services."""

from trustlink.gateway.app import create_gateway_app
from trustlink.gateway.proxy import ReverseProxy, Route, build_routes

__all__ = ["ReverseProxy", "Route", "build_routes", "create_gateway_app"]
