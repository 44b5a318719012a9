"""
Client Monitoring
Prometheus-based metrics collection for the surface client
"""

from .metrics import MetricsCollector, metrics_collector

__all__ = [
    "MetricsCollector",
    "metrics_collector",
]
