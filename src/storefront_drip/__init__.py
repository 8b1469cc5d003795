"""Drip shopper activity events for storefront orders, carts and products."""

__version__ = "0.1.0"

from storefront_drip.client import DripClient, DripResponse
from storefront_drip.config import DripConfig, Settings, get_settings
from storefront_drip.exceptions import DripConfigurationError, DripError, DripResponseError
from storefront_drip.lifecycle import OrderLifecycleHooks
from storefront_drip.models import CartAction, OrderAction, ProductAction
from storefront_drip.payloads import (
    build_address,
    build_cart_event,
    build_line_item,
    build_order_event,
    build_product_event,
)
from storefront_drip.shopper_activity import ShopperActivity
from storefront_drip.urls import StorefrontUrls

__all__ = [
    "__version__",
    # Config
    "DripConfig",
    "Settings",
    "get_settings",
    # Errors
    "DripError",
    "DripConfigurationError",
    "DripResponseError",
    # Payloads
    "build_address",
    "build_cart_event",
    "build_line_item",
    "build_order_event",
    "build_product_event",
    "StorefrontUrls",
    # Dispatch
    "DripClient",
    "DripResponse",
    "ShopperActivity",
    "OrderLifecycleHooks",
    # Actions
    "CartAction",
    "OrderAction",
    "ProductAction",
]
