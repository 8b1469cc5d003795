"""Tracing utilities for Drip requests."""

from contextlib import contextmanager
from typing import Any, Generator

from opentelemetry import trace
from opentelemetry.trace import StatusCode


def get_tracer(name: str = "storefront_drip"):
    """
    Get an OpenTelemetry tracer.

    Without a configured tracer provider this is OpenTelemetry's no-op
    tracer, so spans cost nothing until the host application sets one up.

    Args:
        name: Tracer name (typically module name).
    """
    return trace.get_tracer(name)


@contextmanager
def drip_span(
    event_type: str,
    action: str,
    enabled: bool = True,
    **attributes: Any,
) -> Generator[Any, None, None]:
    """
    Context manager tracing one Drip request.

    Args:
        event_type: cart, order or product.
        action: Activity action sent to Drip.
        enabled: When False, yields a non-recording span.
        **attributes: Additional span attributes.

    Yields:
        The span object.

    Example:
        with drip_span("order", "placed", order_number="R100"):
            await client.create_order_activity_event(payload)
    """
    if not enabled:
        yield trace.INVALID_SPAN
        return

    tracer = get_tracer("storefront_drip.shopper_activity")
    span_attrs: dict[str, Any] = {
        "drip.event_type": event_type,
        "drip.action": action,
    }
    span_attrs.update({f"drip.{key}": value for key, value in attributes.items() if value is not None})

    with tracer.start_as_current_span(
        f"drip.{event_type}_activity",
        record_exception=False,
        set_status_on_exception=False,
    ) as span:
        span.set_attributes(span_attrs)
        try:
            yield span
        except Exception as e:
            span.record_exception(e)
            span.set_status(StatusCode.ERROR)
            raise


def get_current_trace_id() -> str | None:
    """
    Get the current trace ID.

    Returns:
        Trace ID as hex string, or None if not in a trace.
    """
    ctx = trace.get_current_span().get_span_context()
    if ctx.is_valid:
        return format(ctx.trace_id, "032x")
    return None


def get_current_span_id() -> str | None:
    """
    Get the current span ID.

    Returns:
        Span ID as hex string, or None if not in a span.
    """
    ctx = trace.get_current_span().get_span_context()
    if ctx.is_valid:
        return format(ctx.span_id, "016x")
    return None
