"""Plain storefront models and Drip action vocabularies."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum


class CartAction(str, Enum):
    """Drip cart activity actions."""

    CREATED = "created"
    UPDATED = "updated"


class OrderAction(str, Enum):
    """Drip order activity actions."""

    PLACED = "placed"
    UPDATED = "updated"
    PAID = "paid"
    FULFILLED = "fulfilled"
    REFUNDED = "refunded"
    CANCELED = "canceled"


class ProductAction(str, Enum):
    """Drip product activity actions."""

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Taxon:
    """Product category."""

    name: str


@dataclass
class State:
    """State or province."""

    abbr: str | None = None
    name: str | None = None


@dataclass
class Country:
    """Country."""

    name: str | None = None
    iso: str | None = None


@dataclass
class Product:
    """Catalog product."""

    id: int | str
    name: str | None = None
    slug: str | None = None
    brand: str | None = None
    taxons: list[Taxon] = field(default_factory=list)


@dataclass
class Variant:
    """Purchasable variant of a product."""

    id: int | str
    product: Product
    sku: str | None = None
    price: Decimal | None = None
    total_on_hand: int | None = None
    image_url: str | None = None
    updated_at: datetime = field(default_factory=_utcnow)


@dataclass
class LineItem:
    """Order line item."""

    product: Product
    variant_id: int | str | None
    quantity: int
    price: Decimal
    sku: str | None = None
    name: str | None = None
    promo_total: Decimal = Decimal("0")
    additional_tax_total: Decimal = Decimal("0")
    total: Decimal | None = None

    def __post_init__(self) -> None:
        if self.total is None:
            self.total = self.price * self.quantity + self.promo_total + self.additional_tax_total


@dataclass
class Address:
    """Billing or shipping address."""

    address1: str | None = None
    address2: str | None = None
    city: str | None = None
    zipcode: str | None = None
    phone: str | None = None
    company: str | None = None
    state: State | None = None
    state_name: str | None = None
    country: Country | None = None

    # Combined-name storefronts fill ``name``; split-name ones fill the parts
    name: str | None = None
    firstname: str | None = None
    lastname: str | None = None


@dataclass
class Order:
    """
    Storefront order.

    An order is a cart until it reaches the ``complete`` state.
    """

    id: int | str
    number: str
    email: str | None = None
    guest_token: str | None = None
    currency: str | None = "USD"
    total: Decimal = Decimal("0")
    tax_total: Decimal = Decimal("0")
    promo_total: Decimal = Decimal("0")
    line_items: list[LineItem] = field(default_factory=list)
    billing_address: Address | None = None
    shipping_address: Address | None = None
    updated_at: datetime = field(default_factory=_utcnow)

    state: str = "cart"
    payment_state: str | None = None
    shipment_state: str | None = None
    completed_at: datetime | None = None
