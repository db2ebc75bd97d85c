"""Prometheus metrics for signing outcomes."""
from prometheus_client import Counter, generate_latest, CONTENT_TYPE_LATEST

signed_requests_total = Counter(
    "signed_requests_total",
    "Total request signing outcomes",
    ["result"]
)


def render_metrics():
    """Return (payload, content_type) in Prometheus text format."""
    return generate_latest(), CONTENT_TYPE_LATEST
