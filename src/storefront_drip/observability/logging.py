"""JSON logging with Drip request context.

Fields describing the Drip request in progress (event type, action, order
number, sku) live in a ContextVar, so each asyncio task sees only its own
request. ``DripContextFilter`` copies them onto log records.
"""

import json
import logging
import sys
from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

from storefront_drip.observability.tracing import get_current_span_id, get_current_trace_id

_drip_context: ContextVar[dict[str, Any] | None] = ContextVar("drip_context", default=None)


def get_drip_context() -> dict[str, Any] | None:
    """Fields of the Drip request running in the current context, if any."""
    return _drip_context.get()


@contextmanager
def drip_log_context(
    event_type: str,
    action: str,
    **fields: Any,
) -> Generator[dict[str, Any], None, None]:
    """
    Attach Drip request fields to every log record emitted inside the block.

    Usage:
        with drip_log_context("order", "placed", order_number="R100"):
            logger.info("Sending order activity")

    Args:
        event_type: cart, order or product.
        action: Activity action sent to Drip.
        **fields: Extra identifiers; None values are left out.
    """
    context = {"drip_event": event_type, "action": action}
    context.update({key: value for key, value in fields.items() if value is not None})
    token = _drip_context.set(context)
    try:
        yield context
    finally:
        _drip_context.reset(token)


class DripContextFilter(logging.Filter):
    """Adds the current Drip request fields to log records as ``drip``."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.drip = get_drip_context() or {}
        return True


class DripJsonFormatter(logging.Formatter):
    """
    One JSON object per record.

    Includes trace/span ids when a span is active and the ``drip`` fields set
    by DripContextFilter.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        trace_id = get_current_trace_id()
        if trace_id:
            entry["trace_id"] = trace_id
            entry["span_id"] = get_current_span_id()

        drip = getattr(record, "drip", None)
        if drip:
            entry["drip"] = drip

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def configure_logging(level: str = "INFO", json_format: bool = True) -> None:
    """
    Route the root logger to stdout with Drip request context.

    Args:
        level: Root log level.
        json_format: Emit JSON lines instead of plain text.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(DripContextFilter())
    if json_format:
        handler.setFormatter(DripJsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s %(drip)s"
        ))
    root_logger.addHandler(handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
