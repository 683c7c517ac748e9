"""Prometheus metrics for TrustLink."""

from prometheus_client import Counter

RELATIONSHIP_TRANSITIONS = Counter(
    "trustlink_relationship_transitions_total",
    "Relationship state changes applied",
    labelnames=["status"],
)

CAS_CONFLICTS = Counter(
    "trustlink_relationship_cas_conflicts_total",
    "Conditional relationship updates that lost a race and were re-read",
)

EVENTS_PUBLISHED = Counter(
    "trustlink_events_published_total",
    "Domain events accepted by the broker",
    labelnames=["topic"],
)

EVENTS_FAILED = Counter(
    "trustlink_events_failed_total",
    "Domain events that could not be published",
    labelnames=["topic"],
)

EVENTS_CONSUMED = Counter(
    "trustlink_events_consumed_total",
    "Events handled by the notification consumer",
    labelnames=["kind", "outcome"],
)

GATEWAY_REQUESTS = Counter(
    "trustlink_gateway_requests_total",
    "Requests forwarded by the gateway",
    labelnames=["upstream", "status"],
)
