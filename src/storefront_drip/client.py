"""Drip REST API client for shopper activity events."""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from storefront_drip import __version__
from storefront_drip.config import DripConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DripResponse:
    """Status and decoded body of a Drip API response."""

    status_code: int
    body: Any = None

    @property
    def success(self) -> bool:
        return 200 <= self.status_code < 300


class DripClient:
    """
    Drip REST API client (v3).

    Sends shopper activity events for a single Drip account. Each call is
    one POST; the client does not retry or batch.

    Authentication uses Basic Auth with the API token as user name and an
    empty password.
    """

    API_VERSION = "v3"

    def __init__(
        self,
        config: DripConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the Drip client.

        Args:
            config: Drip credentials and account id.
            transport: Optional httpx transport (e.g., a mock in tests).

        Raises:
            DripConfigurationError: If the API key or account id is missing.
        """
        config.validate()
        self.config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return f"{self.config.api_url.rstrip('/')}/{self.API_VERSION}/{self.config.account_id}"

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                auth=(self.config.api_key, ""),
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                    "User-Agent": f"storefront-drip/{__version__}",
                },
                timeout=self.config.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "DripClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def _post(self, path: str, payload: dict[str, Any]) -> DripResponse:
        """POST a JSON payload and wrap the response."""
        response = await self.client.post(path, json=payload)
        logger.debug(f"Drip POST {path} -> {response.status_code}")
        return DripResponse(status_code=response.status_code, body=_decode_body(response))

    async def create_cart_activity_event(self, payload: dict[str, Any]) -> DripResponse:
        """Record a cart activity event."""
        return await self._post("/shopper_activity/cart", payload)

    async def create_order_activity_event(self, payload: dict[str, Any]) -> DripResponse:
        """Record an order activity event."""
        return await self._post("/shopper_activity/order", payload)

    async def create_product_activity_event(self, payload: dict[str, Any]) -> DripResponse:
        """Record a product activity event."""
        return await self._post("/shopper_activity/product", payload)


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    if "json" in response.headers.get("content-type", ""):
        return response.json()
    return response.text
