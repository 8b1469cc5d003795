"""Storefront URLs embedded in Drip events."""

from urllib.parse import quote

from storefront_drip.protocols import OrderLike, ProductLike


class StorefrontUrls:
    """
    Builds customer-facing storefront URLs.

    Mirrors the storefront's default routes: ``/cart``,
    ``/orders/{number}`` and ``/products/{slug}``.
    """

    def __init__(self, store_url: str) -> None:
        """
        Initialize the URL builder.

        Args:
            store_url: Storefront base URL (e.g., "https://shop.example.com").
        """
        self.store_url = store_url.rstrip("/")

    def cart_url(self) -> str:
        return f"{self.store_url}/cart"

    def order_url(self, order: OrderLike) -> str:
        return f"{self.store_url}/orders/{quote(str(order.number))}"

    def product_url(self, product: ProductLike) -> str:
        # Products without a slug are still routable by id
        key = product.slug or product.id
        return f"{self.store_url}/products/{quote(str(key))}"
