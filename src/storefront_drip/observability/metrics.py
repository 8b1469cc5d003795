"""OpenTelemetry metrics for Drip requests."""

import logging

from opentelemetry import metrics

logger = logging.getLogger(__name__)

# Global metrics registry
_metrics_registry: "MetricsRegistry | None" = None


class MetricsRegistry:
    """
    Registry for OpenTelemetry metrics.

    Provides:
    - Count of shopper activity events by type, action and outcome
    - Duration of Drip requests
    """

    def __init__(self, meter_name: str = "storefront_drip") -> None:
        """
        Initialize the metrics registry.

        Args:
            meter_name: Name for the meter.
        """
        meter = metrics.get_meter(meter_name)

        self.events_total = meter.create_counter(
            name="drip_events_total",
            description="Total shopper activity events sent to Drip",
            unit="1",
        )
        self.event_duration = meter.create_histogram(
            name="drip_event_duration_seconds",
            description="Duration of Drip shopper activity requests in seconds",
            unit="s",
        )
        logger.debug("Metrics registry initialized")

    def record_event(
        self,
        event_type: str,
        action: str,
        duration_seconds: float,
        status: str = "success",
    ) -> None:
        """
        Record one shopper activity request.

        Args:
            event_type: cart, order or product.
            action: Activity action sent to Drip.
            duration_seconds: Time taken by the request.
            status: success, rejected or error.
        """
        labels = {
            "event_type": event_type,
            "action": action,
            "status": status,
        }
        self.events_total.add(1, labels)
        self.event_duration.record(duration_seconds, labels)


def get_metrics_registry() -> MetricsRegistry:
    """Get or create the global metrics registry."""
    global _metrics_registry
    if _metrics_registry is None:
        _metrics_registry = MetricsRegistry()
    return _metrics_registry


def record_drip_event(
    event_type: str,
    action: str,
    duration_seconds: float,
    status: str = "success",
) -> None:
    """Convenience function to record a Drip request."""
    get_metrics_registry().record_event(event_type, action, duration_seconds, status)
