"""
Drip shopper activity payloads.

Builds the request bodies of Drip's cart, order and product activity
endpoints from storefront objects. Builders are pure: they only read from
their inputs and return new mappings.

Drip treats a missing key differently from an explicit ``null``, so every
absent value is left out of the payload. Category lists are the exception:
a product without taxons is sent with ``categories: []``.

See https://developer.drip.com/#shopper-activity
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from storefront_drip.names import split_name
from storefront_drip.protocols import (
    AddressLike,
    LineItemLike,
    OrderLike,
    ProductLike,
    VariantLike,
)
from storefront_drip.urls import StorefrontUrls

DEFAULT_PROVIDER = "solidus"


class _Record(BaseModel):
    """Base for payload records; ``None`` fields are dropped on export."""

    model_config = ConfigDict(frozen=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class AddressRecord(_Record):
    company: str | None = None
    address_1: str | None = None
    address_2: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None
    phone: str | None = None
    first_name: str | None = None
    last_name: str | None = None


class CartItemRecord(_Record):
    product_id: str | None = None
    product_variant_id: str | None = None
    sku: str | None = None
    name: str | None = None
    categories: list[str]
    price: float
    quantity: int | None = None
    discounts: float
    total: float
    product_url: str | None = None


class OrderItemRecord(CartItemRecord):
    taxes: float


class CartEvent(_Record):
    """Body of ``POST /v3/{account_id}/shopper_activity/cart``."""

    provider: str
    email: str | None = None
    person_id: str | None = None
    action: str
    occurred_at: str
    cart_id: str
    cart_public_id: str | None = None
    grand_total: float
    total_discounts: float
    currency: str | None = None
    cart_url: str | None = None
    items: list[CartItemRecord]


class OrderEvent(_Record):
    """Body of ``POST /v3/{account_id}/shopper_activity/order``."""

    provider: str
    email: str | None = None
    person_id: str | None = None
    action: str
    occurred_at: str
    order_id: str
    order_public_id: str | None = None
    grand_total: float
    total_taxes: float
    total_discounts: float
    currency: str | None = None
    order_url: str | None = None
    items: list[OrderItemRecord]
    billing_address: AddressRecord | None = None
    shipping_address: AddressRecord | None = None


class ProductEvent(_Record):
    """Body of ``POST /v3/{account_id}/shopper_activity/product``."""

    provider: str
    action: str
    occurred_at: str
    product_id: str
    product_variant_id: str
    sku: str | None = None
    name: str | None = None
    brand: str | None = None
    categories: list[str]
    price: float
    inventory: int | None = None
    product_url: str | None = None
    image_url: str | None = None


def to_amount(value: Decimal | float | int | None) -> float:
    """Convert a monetary amount to a plain number; missing amounts are 0.0."""
    if value is None:
        return 0.0
    return float(value)


def format_timestamp(value: datetime) -> str:
    """
    Format a timestamp as ISO-8601 with seconds precision.

    Naive datetimes are taken as UTC, and UTC is written as ``Z``.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    formatted = value.replace(microsecond=0).isoformat()
    if formatted.endswith("+00:00"):
        formatted = formatted[: -len("+00:00")] + "Z"
    return formatted


def _text(value: Any) -> str | None:
    return None if value is None else str(value)


def _action(action: str | Enum) -> str:
    # Unknown actions pass through; Drip rejects them
    if isinstance(action, Enum):
        return str(action.value)
    return action


def _contact(order: OrderLike) -> dict[str, str | None]:
    email = order.email or None
    return {
        "email": email,
        "person_id": order.guest_token if email is None else None,
    }


def categories_for(product: ProductLike) -> list[str]:
    """Names of all taxons the product is classified under."""
    return [taxon.name for taxon in product.taxons]


def _item_fields(line_item: LineItemLike, urls: StorefrontUrls | None) -> dict[str, Any]:
    product = line_item.product
    return {
        "product_id": _text(product.id),
        "product_variant_id": _text(line_item.variant_id),
        "sku": line_item.sku,
        "name": line_item.name,
        "categories": categories_for(product),
        "price": to_amount(line_item.price),
        "quantity": line_item.quantity,
        "discounts": to_amount(line_item.promo_total),
        "total": to_amount(line_item.total),
        "product_url": urls.product_url(product) if urls else None,
    }


def build_line_item(
    line_item: LineItemLike,
    urls: StorefrontUrls | None = None,
    include_taxes: bool = False,
) -> dict[str, Any]:
    """
    Build the Drip record of a single line item.

    Args:
        line_item: Line item to describe.
        urls: Storefront URL builder; without one ``product_url`` is omitted.
        include_taxes: Add the ``taxes`` field (order events only).

    Returns:
        Line item record without absent fields.
    """
    fields = _item_fields(line_item, urls)
    if include_taxes:
        return OrderItemRecord(
            **fields, taxes=to_amount(line_item.additional_tax_total)
        ).to_payload()
    return CartItemRecord(**fields).to_payload()


def build_address(
    address: AddressLike | None,
    combined_name: bool = False,
    name_source: AddressLike | None = None,
) -> dict[str, Any] | None:
    """
    Build the Drip record of a postal address.

    Args:
        address: Address to describe.
        combined_name: The storefront stores one full-name field per address
            instead of first/last name fields.
        name_source: Address to read first/last names from when names are
            not combined. Defaults to ``address`` itself.

    Returns:
        Address record without absent fields, or None without an address.
    """
    if address is None:
        return None
    return _address_record(address, combined_name, name_source).to_payload()


def _address_record(
    address: AddressLike,
    combined_name: bool,
    name_source: AddressLike | None,
) -> AddressRecord:
    if combined_name:
        first_name, last_name = split_name(address.name)
    else:
        source = name_source or address
        first_name, last_name = source.firstname, source.lastname

    state = address.state.abbr if address.state is not None else None
    return AddressRecord(
        company=address.company,
        address_1=address.address1,
        address_2=address.address2,
        city=address.city,
        state=state or address.state_name,
        postal_code=address.zipcode,
        country=address.country.name if address.country is not None else None,
        phone=address.phone,
        first_name=first_name,
        last_name=last_name,
    )


def build_cart_event(
    order: OrderLike,
    action: str | Enum,
    urls: StorefrontUrls | None = None,
    provider: str = DEFAULT_PROVIDER,
) -> dict[str, Any]:
    """
    Build a Drip cart activity event.

    Cart activity lets Drip detect abandoned carts.

    Args:
        order: Cart (incomplete order) to describe.
        action: ``created`` or ``updated``.
        urls: Storefront URL builder; without one URL fields are omitted.
        provider: Provider tag Drip groups events under.

    Returns:
        Request body for the cart activity endpoint.
    """
    event = CartEvent(
        provider=provider,
        **_contact(order),
        action=_action(action),
        occurred_at=format_timestamp(order.updated_at),
        cart_id=str(order.id),
        cart_public_id=_text(order.number),
        grand_total=to_amount(order.total),
        total_discounts=to_amount(order.promo_total),
        currency=order.currency,
        cart_url=urls.cart_url() if urls else None,
        items=[CartItemRecord(**_item_fields(item, urls)) for item in order.line_items],
    )
    return event.to_payload()


def build_order_event(
    order: OrderLike,
    action: str | Enum,
    urls: StorefrontUrls | None = None,
    provider: str = DEFAULT_PROVIDER,
    combined_name: bool = False,
    mirror_shipping_name: bool = False,
) -> dict[str, Any]:
    """
    Build a Drip order activity event.

    Args:
        order: Order to describe.
        action: ``placed``, ``updated``, ``paid``, ``fulfilled``,
            ``refunded`` or ``canceled``.
        urls: Storefront URL builder; without one URL fields are omitted.
        provider: Provider tag Drip groups events under.
        combined_name: Addresses store a single full-name field.
        mirror_shipping_name: Read first/last names of both addresses from
            the shipping address. Matches the legacy extension, which
            reports the shipping recipient's name on the billing address.

    Returns:
        Request body for the order activity endpoint.
    """
    name_source = order.shipping_address if mirror_shipping_name else None

    def address_record(address: AddressLike | None) -> AddressRecord | None:
        if address is None:
            return None
        return _address_record(address, combined_name, name_source)

    items = [
        OrderItemRecord(
            **_item_fields(item, urls),
            taxes=to_amount(item.additional_tax_total),
        )
        for item in order.line_items
    ]
    event = OrderEvent(
        provider=provider,
        **_contact(order),
        action=_action(action),
        occurred_at=format_timestamp(order.updated_at),
        order_id=str(order.id),
        order_public_id=_text(order.number),
        grand_total=to_amount(order.total),
        total_taxes=to_amount(order.tax_total),
        total_discounts=to_amount(order.promo_total),
        currency=order.currency,
        order_url=urls.order_url(order) if urls else None,
        items=items,
        billing_address=address_record(order.billing_address),
        shipping_address=address_record(order.shipping_address),
    )
    return event.to_payload()


def build_product_event(
    variant: VariantLike,
    action: str | Enum,
    urls: StorefrontUrls | None = None,
    provider: str = DEFAULT_PROVIDER,
) -> dict[str, Any]:
    """
    Build a Drip product activity event for one variant.

    Args:
        variant: Variant to describe.
        action: ``created``, ``updated`` or ``deleted``.
        urls: Storefront URL builder; without one ``product_url`` is omitted.
        provider: Provider tag Drip groups events under.

    Returns:
        Request body for the product activity endpoint.
    """
    product = variant.product
    event = ProductEvent(
        provider=provider,
        action=_action(action),
        occurred_at=format_timestamp(variant.updated_at),
        product_id=str(product.id),
        product_variant_id=str(variant.id),
        sku=variant.sku,
        name=product.name,
        brand=product.brand,
        categories=categories_for(product),
        price=to_amount(variant.price),
        inventory=variant.total_on_hand,
        product_url=urls.product_url(product) if urls else None,
        image_url=variant.image_url,
    )
    return event.to_payload()
