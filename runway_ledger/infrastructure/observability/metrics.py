"""Prometheus metrics for projection outcomes and ledger writes"""

from typing import Optional

from prometheus_client import Counter, Histogram

# Projection metrics
projection_counter = Counter(
    "runway_projection_total",
    "Total ledger projections computed",
    ["channel", "outcome"],  # outcome: bounded | unbounded
)

projection_duration_histogram = Histogram(
    "runway_projection_duration_seconds",
    "Time spent loading and projecting a ledger",
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)

# Ledger write metrics
transaction_write_counter = Counter(
    "runway_transaction_writes_total",
    "Transactions created, updated or deleted",
    ["operation", "kind"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_projection(channel: Optional[str], is_bounded: bool) -> None:
    """Record projection metrics for monitoring how often pools run dry"""
    outcome = "bounded" if is_bounded else "unbounded"
    projection_counter.labels(channel=channel or "combined", outcome=outcome).inc()
