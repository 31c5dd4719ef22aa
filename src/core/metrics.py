"""Prometheus metrics for the gift card service.

Metrics are organized into two categories:

Business Metrics:
- giftcard_created_total: Gift cards created
- giftcard_amount_total: Sum of amounts offered
- giftcard_resolved_total: Status resolutions by outcome
- giftcard_status_update_rejected_total: Refused status updates by reason
- giftcard_list_total: List queries by role

Technical Metrics:
- giftcard_status_update_latency_seconds: Status update latency
- giftcard_http_requests_total: HTTP requests by endpoint/status
- giftcard_http_request_latency_seconds: HTTP latency by endpoint
"""

import time
from contextlib import contextmanager
from decimal import Decimal
from typing import Generator

from prometheus_client import Counter, Histogram, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics
# =============================================================================

gift_card_created_total = Counter(
    "giftcard_created_total",
    "Total number of gift cards created",
)

gift_card_amount_total = Counter(
    "giftcard_amount_total",
    "Sum of all gift card amounts offered",
)

gift_card_resolved_total = Counter(
    "giftcard_resolved_total",
    "Total number of gift cards resolved by the receiver",
    ["outcome"],  # accepted, rejected
)

gift_card_update_rejected_total = Counter(
    "giftcard_status_update_rejected_total",
    "Total number of refused status updates",
    ["reason"],  # error code
)

gift_card_list_total = Counter(
    "giftcard_list_total",
    "Total number of gift card list queries",
    ["role"],  # sender, receiver
)


# =============================================================================
# Technical Metrics
# =============================================================================

status_update_latency = Histogram(
    "giftcard_status_update_latency_seconds",
    "Status update latency in seconds",
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

http_requests_total = Counter(
    "giftcard_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "giftcard_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_gift_card_created(amount: Decimal) -> None:
    """Record a newly created gift card."""
    gift_card_created_total.inc()
    gift_card_amount_total.inc(float(amount))


def record_gift_card_resolved(status_name: str) -> None:
    """Record a successful accept/reject."""
    gift_card_resolved_total.labels(outcome=status_name.lower()).inc()


def record_status_update_rejected(reason: str) -> None:
    """Record a status update refused by the engine."""
    gift_card_update_rejected_total.labels(reason=reason).inc()


def record_gift_card_list(role: str) -> None:
    """Record a list query."""
    gift_card_list_total.labels(role=role).inc()


@contextmanager
def track_status_update_latency() -> Generator[None, None, None]:
    """Context manager to track status update latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        status_update_latency.observe(duration)


def record_http_request(method: str, endpoint: str, status: int, duration: float) -> None:
    """Record an HTTP request."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()
    http_request_latency.labels(method=method, endpoint=endpoint).observe(duration)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST
