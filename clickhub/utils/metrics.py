"""
Prometheus metrics for WebSocket connection and click monitoring.

Metrics are created through the `_get_or_create_*` helpers so that
re-importing the module (uvicorn --reload, test collection) reuses the
collectors already in the default registry instead of failing.
"""

from prometheus_client import REGISTRY, Counter, Gauge


def _get_or_create_counter(
    name: str, doc: str, labels: list[str] | None = None
) -> Counter:
    """
    Get existing counter or create new one.

    Args:
        name: Metric name.
        doc: Metric documentation.
        labels: Optional list of label names.

    Returns:
        Counter instance.
    """
    try:
        return Counter(name, doc, labels or [])
    except ValueError:
        # Metric already exists, retrieve it from registry
        return REGISTRY._names_to_collectors[name]


def _get_or_create_gauge(
    name: str, doc: str, labels: list[str] | None = None
) -> Gauge:
    """
    Get existing gauge or create new one.

    Args:
        name: Metric name.
        doc: Metric documentation.
        labels: Optional list of label names.

    Returns:
        Gauge instance.
    """
    try:
        return Gauge(name, doc, labels or [])
    except ValueError:
        # Metric already exists, retrieve it from registry
        return REGISTRY._names_to_collectors[name]


# WebSocket Connection Metrics
ws_connections_active = _get_or_create_gauge(
    "ws_connections_active", "Number of active WebSocket connections"
)

ws_connections_total = _get_or_create_counter(
    "ws_connections_total",
    "Total WebSocket connections",
    ["status"],  # accepted, handshake_failed
)

ws_messages_received_total = _get_or_create_counter(
    "ws_messages_received_total", "Total WebSocket messages received"
)

ws_messages_sent_total = _get_or_create_counter(
    "ws_messages_sent_total", "Total WebSocket messages sent"
)

ws_messages_dropped_total = _get_or_create_counter(
    "ws_messages_dropped_total",
    "Inbound WebSocket messages dropped without effect",
    ["reason"],  # malformed, ignored
)

# Click Metrics
clicks_total = _get_or_create_counter(
    "clicks_total", "Total click events processed"
)

broadcast_delivery_failures_total = _get_or_create_counter(
    "broadcast_delivery_failures_total",
    "Broadcast frames that could not be enqueued for a recipient",
)


__all__ = [
    "ws_connections_active",
    "ws_connections_total",
    "ws_messages_received_total",
    "ws_messages_sent_total",
    "ws_messages_dropped_total",
    "clicks_total",
    "broadcast_delivery_failures_total",
]
