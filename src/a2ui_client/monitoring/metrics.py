"""
Metrics Collection
Prometheus metrics for surface client activity
"""

import time
from contextlib import contextmanager
from typing import Callable

from prometheus_client import Counter, Histogram, CollectorRegistry, REGISTRY, generate_latest


class MetricsCollector:
    """
    Collects and exposes Prometheus metrics for the surface client.
    """

    def __init__(self, registry: CollectorRegistry = REGISTRY) -> None:
        self.registry = registry

        # Protocol metrics
        self.messages_decoded = Counter(
            "a2ui_messages_decoded_total",
            "Total number of protocol messages decoded",
            ["type"],
            registry=registry,
        )
        self.decode_errors = Counter(
            "a2ui_decode_errors_total",
            "Total number of rejected NDJSON batches",
            registry=registry,
        )

        # Action metrics
        self.dispatches_total = Counter(
            "a2ui_dispatches_total",
            "Total number of dispatched actions",
            ["action", "outcome"],
            registry=registry,
        )
        self.stale_responses = Counter(
            "a2ui_stale_responses_total",
            "Responses discarded because a newer request superseded them",
            registry=registry,
        )

        # Transport metrics
        self.http_duration = Histogram(
            "a2ui_http_duration_seconds",
            "HTTP round trip duration in seconds",
            ["method", "status"],
            buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0],
            registry=registry,
        )

        # Rendering metrics
        self.resolution_errors = Counter(
            "a2ui_resolution_errors_total",
            "Component subtrees that failed to resolve",
            registry=registry,
        )

    def record_message(self, msg_type: str) -> None:
        """Record a decoded message."""
        self.messages_decoded.labels(type=msg_type).inc()

    def record_decode_error(self) -> None:
        """Record a rejected batch."""
        self.decode_errors.inc()

    def record_dispatch(self, action: str, outcome: str) -> None:
        """Record an action dispatch."""
        self.dispatches_total.labels(action=action, outcome=outcome).inc()

    def record_stale_response(self) -> None:
        """Record a discarded response."""
        self.stale_responses.inc()

    def record_http(self, method: str, status: str, duration: float) -> None:
        """Record an HTTP round trip."""
        self.http_duration.labels(method=method, status=status).observe(duration)

    def record_resolution_error(self) -> None:
        """Record a subtree resolution failure."""
        self.resolution_errors.inc()

    @contextmanager
    def measure_duration(self, callback: Callable[[float], None]):
        """Context manager to measure operation duration."""
        start = time.time()
        try:
            yield
        finally:
            duration = time.time() - start
            callback(duration)

    def get_metrics(self) -> bytes:
        """Get metrics in Prometheus format."""
        return generate_latest(self.registry)


# Global metrics collector instance
metrics_collector = MetricsCollector()
