"""Read-only capability interfaces for the storefront object graph.

The payload builders only read attributes, so any object exposing these
attributes (ORM rows, dataclasses, API wrappers) can be passed in.
"""

from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal
from typing import Protocol, runtime_checkable

Amount = Decimal | float | int | None


@runtime_checkable
class TaxonLike(Protocol):
    """Category association of a product."""

    name: str


@runtime_checkable
class StateLike(Protocol):
    """State or province record."""

    abbr: str | None


@runtime_checkable
class CountryLike(Protocol):
    """Country record."""

    name: str | None


@runtime_checkable
class ProductLike(Protocol):
    """Product a line item or variant belongs to."""

    id: int | str
    name: str | None
    slug: str | None
    brand: str | None
    taxons: Sequence[TaxonLike]


@runtime_checkable
class VariantLike(Protocol):
    """Purchasable variant of a product."""

    id: int | str
    sku: str | None
    price: Amount
    product: ProductLike
    total_on_hand: int | None
    image_url: str | None
    updated_at: datetime


@runtime_checkable
class LineItemLike(Protocol):
    """Line item of an order."""

    product: ProductLike
    variant_id: int | str | None
    sku: str | None
    name: str | None
    price: Amount
    quantity: int
    promo_total: Amount
    additional_tax_total: Amount
    total: Amount


@runtime_checkable
class AddressLike(Protocol):
    """
    Postal address.

    Depending on how the storefront stores names, either ``name`` holds the
    full name or ``firstname``/``lastname`` hold its parts.
    """

    company: str | None
    address1: str | None
    address2: str | None
    city: str | None
    state: StateLike | None
    state_name: str | None
    zipcode: str | None
    country: CountryLike | None
    phone: str | None
    name: str | None
    firstname: str | None
    lastname: str | None


@runtime_checkable
class OrderLike(Protocol):
    """Order or cart."""

    id: int | str
    number: str
    email: str | None
    guest_token: str | None
    total: Amount
    tax_total: Amount
    promo_total: Amount
    currency: str | None
    updated_at: datetime
    line_items: Sequence[LineItemLike]
    billing_address: AddressLike | None
    shipping_address: AddressLike | None

    # Lifecycle hooks only
    state: str
    payment_state: str | None
    shipment_state: str | None
