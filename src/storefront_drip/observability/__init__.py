"""Observability module for tracing, metrics, and logging."""

from storefront_drip.observability.logging import (
    DripContextFilter,
    configure_logging,
    drip_log_context,
    get_drip_context,
)
from storefront_drip.observability.metrics import (
    MetricsRegistry,
    get_metrics_registry,
    record_drip_event,
)
from storefront_drip.observability.tracing import drip_span, get_tracer

__all__ = [
    # Tracing
    "get_tracer",
    "drip_span",
    # Metrics
    "MetricsRegistry",
    "get_metrics_registry",
    "record_drip_event",
    # Logging
    "DripContextFilter",
    "configure_logging",
    "drip_log_context",
    "get_drip_context",
]
