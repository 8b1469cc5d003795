"""Sends storefront activity to Drip."""

import logging
import time
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any

from storefront_drip.client import DripClient, DripResponse
from storefront_drip.config import DripConfig
from storefront_drip.exceptions import DripResponseError
from storefront_drip.observability import drip_log_context, drip_span, record_drip_event
from storefront_drip.payloads import build_cart_event, build_order_event, build_product_event
from storefront_drip.protocols import OrderLike, VariantLike
from storefront_drip.urls import StorefrontUrls

logger = logging.getLogger(__name__)

SendFn = Callable[[dict[str, Any]], Awaitable[DripResponse]]


class ShopperActivity:
    """
    Drip shopper activity dispatcher.

    Builds the event payload for an order, cart or product, sends it with a
    single request and turns Drip's answer into ``True`` or a
    DripResponseError. Network errors from httpx are not caught.
    """

    def __init__(
        self,
        config: DripConfig,
        client: DripClient | None = None,
        urls: StorefrontUrls | None = None,
    ) -> None:
        """
        Initialize the dispatcher.

        Args:
            config: Drip account and payload settings.
            client: Drip client; one is created from ``config`` on first
                send if omitted, so payloads can be built without credentials.
            urls: Storefront URL builder; defaults to one for
                ``config.storefront_url`` when that is set.
        """
        self.config = config
        self._client = client
        if urls is None and config.storefront_url:
            urls = StorefrontUrls(config.storefront_url)
        self.urls = urls

    @property
    def client(self) -> DripClient:
        if self._client is None:
            self._client = DripClient(self.config)
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()

    async def send_cart_activity(self, order: OrderLike, action: str | Enum) -> bool:
        """
        Record cart activity, which Drip uses to detect cart abandonment.

        Args:
            order: Incomplete order.
            action: ``created`` or ``updated``.

        Returns:
            True when Drip accepted the event.

        Raises:
            DripResponseError: If Drip rejected the event.
        """
        payload = self.cart_payload(order, action)
        return await self._send(
            "cart",
            payload,
            self.client.create_cart_activity_event,
            order_number=order.number,
        )

    async def send_order_activity(self, order: OrderLike, action: str | Enum) -> bool:
        """
        Record order activity, which feeds the customer's lifetime value.

        Args:
            order: Order to record.
            action: ``placed``, ``updated``, ``paid``, ``fulfilled``,
                ``refunded`` or ``canceled``.

        Returns:
            True when Drip accepted the event.

        Raises:
            DripResponseError: If Drip rejected the event.
        """
        payload = self.order_payload(order, action)
        return await self._send(
            "order",
            payload,
            self.client.create_order_activity_event,
            order_number=order.number,
        )

    async def send_product_activity(self, variant: VariantLike, action: str | Enum) -> bool:
        """
        Record catalog activity for one product variant.

        Args:
            variant: Variant that was created, updated or deleted.
            action: ``created``, ``updated`` or ``deleted``.

        Returns:
            True when Drip accepted the event.

        Raises:
            DripResponseError: If Drip rejected the event.
        """
        payload = self.product_payload(variant, action)
        return await self._send(
            "product",
            payload,
            self.client.create_product_activity_event,
            sku=variant.sku,
        )

    def cart_payload(self, order: OrderLike, action: str | Enum) -> dict[str, Any]:
        """Build the cart event body that send_cart_activity posts."""
        return build_cart_event(order, action, self.urls, self.config.provider)

    def order_payload(self, order: OrderLike, action: str | Enum) -> dict[str, Any]:
        """Build the order event body using the configured name handling."""
        return build_order_event(
            order,
            action,
            self.urls,
            self.config.provider,
            combined_name=self.config.combined_name,
            mirror_shipping_name=self.config.mirror_shipping_name,
        )

    def product_payload(self, variant: VariantLike, action: str | Enum) -> dict[str, Any]:
        return build_product_event(variant, action, self.urls, self.config.provider)

    async def _send(
        self,
        event_type: str,
        payload: dict[str, Any],
        send: SendFn,
        **context: Any,
    ) -> bool:
        action = payload["action"]
        status = "error"
        start = time.perf_counter()

        with drip_log_context(event_type, action, **context):
            try:
                with drip_span(event_type, action, enabled=self.config.enable_tracing, **context):
                    response = await send(payload)
                    if not response.success:
                        status = "rejected"
                        self._handle_error_response(event_type, response)
                    status = "success"
            finally:
                if self.config.enable_metrics:
                    record_drip_event(event_type, action, time.perf_counter() - start, status)

            logger.info(f"Drip accepted {event_type} activity '{action}'")
        return True

    def _handle_error_response(self, event_type: str, response: DripResponse) -> None:
        error = DripResponseError(event_type, response.status_code, response.body)
        logger.warning(error.message)
        raise error
