"""Order lifecycle hooks that report transitions to Drip."""

import logging
from collections.abc import Awaitable

import httpx

from storefront_drip.exceptions import DripError
from storefront_drip.models import CartAction, OrderAction
from storefront_drip.protocols import OrderLike
from storefront_drip.shopper_activity import ShopperActivity

logger = logging.getLogger(__name__)

COMPLETED_STATES = frozenset({"complete", "canceled", "awaiting_return", "returned"})


def is_completed(order: OrderLike) -> bool:
    """Whether the order has left the cart/checkout phase."""
    return getattr(order, "completed_at", None) is not None or order.state in COMPLETED_STATES


class OrderLifecycleHooks:
    """
    Maps storefront order transitions to Drip activity events.

    Incomplete orders are reported as carts and completed ones as orders.
    Drip failures are logged and reported as ``False`` so a marketing event
    never blocks the order transition that triggered it.
    """

    def __init__(self, activity: ShopperActivity) -> None:
        self.activity = activity

    async def order_created(self, order: OrderLike) -> bool:
        return await self._notify(
            order, self.activity.send_cart_activity(order, CartAction.CREATED)
        )

    async def order_updated(self, order: OrderLike) -> bool:
        """Report a recalculated order as an updated cart or order."""
        if is_completed(order):
            send = self.activity.send_order_activity(order, OrderAction.UPDATED)
        else:
            send = self.activity.send_cart_activity(order, CartAction.UPDATED)
        return await self._notify(order, send)

    async def order_completed(self, order: OrderLike) -> bool:
        return await self._notify(
            order, self.activity.send_order_activity(order, OrderAction.PLACED)
        )

    async def order_canceled(self, order: OrderLike) -> bool:
        return await self._notify(
            order, self.activity.send_order_activity(order, OrderAction.CANCELED)
        )

    async def shipment_shipped(self, order: OrderLike) -> bool | None:
        """Report the order as fulfilled once every shipment has shipped."""
        if order.shipment_state != "shipped":
            return None
        return await self._notify(
            order, self.activity.send_order_activity(order, OrderAction.FULFILLED)
        )

    async def payment_captured(self, order: OrderLike) -> bool | None:
        """Report the order as paid once its balance is settled."""
        if order.payment_state != "paid":
            return None
        return await self._notify(
            order, self.activity.send_order_activity(order, OrderAction.PAID)
        )

    async def refund_recorded(self, order: OrderLike) -> bool:
        return await self._notify(
            order, self.activity.send_order_activity(order, OrderAction.REFUNDED)
        )

    async def _notify(self, order: OrderLike, send: Awaitable[bool]) -> bool:
        try:
            return await send
        except DripError as e:
            logger.error(f"Drip activity for order {order.number} failed: {e.message}")
        except httpx.HTTPError as e:
            logger.error(f"Drip unreachable for order {order.number}: {e}")
        except Exception:
            logger.exception(f"Drip activity for order {order.number} could not be built")
        return False
