"""Prometheus metrics for mail delivery monitoring.

Usage:
    from mail_recorder.infra.email.metrics import email_delivery_total

    email_delivery_total.labels(method="db", status="success").inc()
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

# =============================================================================
# Delivery Metrics
# =============================================================================

email_delivery_total = Counter(
    "mail_recorder_delivery_total",
    "Total number of delivery attempts",
    labelnames=["method", "status"],
)
"""
Counter for tracking delivery attempts per delivery method.

Labels:
    method: Delivery method name (db, memory, console, file)
    status: Delivery status (success, failed)
"""

email_delivery_duration_seconds = Histogram(
    "mail_recorder_delivery_duration_seconds",
    "Delivery duration in seconds",
    labelnames=["method"],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

# =============================================================================
# Persistence Metrics
# =============================================================================

email_records_persisted_total = Counter(
    "mail_recorder_records_persisted_total",
    "Total number of records created through record factories",
    labelnames=["factory"],
)

email_chained_total = Counter(
    "mail_recorder_chained_total",
    "Total number of messages forwarded to a chained delivery method",
    labelnames=["method"],
)

__all__ = [
    "email_chained_total",
    "email_delivery_duration_seconds",
    "email_delivery_total",
    "email_records_persisted_total",
]
