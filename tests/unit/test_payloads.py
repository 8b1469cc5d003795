"""Unit tests for Drip payload builders."""

import json
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from storefront_drip.models import (
    Address,
    CartAction,
    LineItem,
    OrderAction,
    Product,
    ProductAction,
    Variant,
)
from storefront_drip.payloads import (
    build_address,
    build_cart_event,
    build_line_item,
    build_order_event,
    build_product_event,
    format_timestamp,
    to_amount,
)


class TestAmountsAndTimestamps:
    """Tests for value normalization helpers."""

    def test_decimal_to_float(self):
        """Decimals become plain floats."""
        assert to_amount(Decimal("42.50")) == 42.5
        assert isinstance(to_amount(Decimal("42.50")), float)

    def test_missing_amount_is_zero(self):
        """A missing amount is reported as 0.0."""
        assert to_amount(None) == 0.0

    def test_utc_timestamp_uses_z(self):
        """UTC timestamps end with Z and drop microseconds."""
        value = datetime(2024, 1, 15, 10, 30, 5, 123456, tzinfo=timezone.utc)
        assert format_timestamp(value) == "2024-01-15T10:30:05Z"

    def test_naive_timestamp_is_utc(self):
        """Naive datetimes are taken as UTC."""
        assert format_timestamp(datetime(2024, 1, 15, 10, 30)) == "2024-01-15T10:30:00Z"

    def test_offset_timestamp_keeps_offset(self):
        """Non-UTC offsets are preserved."""
        value = datetime(2024, 1, 15, 10, 30, tzinfo=timezone(timedelta(hours=-5)))
        assert format_timestamp(value) == "2024-01-15T10:30:00-05:00"


class TestCartEvent:
    """Tests for build_cart_event."""

    def test_cart_fields(self, order, urls):
        """Cart event carries cart identifiers and totals."""
        payload = build_cart_event(order, "created", urls)

        assert payload["provider"] == "solidus"
        assert payload["email"] == "a@example.com"
        assert payload["action"] == "created"
        assert payload["occurred_at"] == "2024-01-15T10:30:00Z"
        assert payload["cart_id"] == "100"
        assert payload["cart_public_id"] == "R100"
        assert payload["grand_total"] == 42.5
        assert payload["total_discounts"] == -5.0
        assert payload["currency"] == "USD"
        assert payload["cart_url"] == "https://shop.example.com/cart"
        assert "total_taxes" not in payload
        assert "order_id" not in payload

    def test_email_present_omits_person_id(self, order):
        """An order with an email never sends the guest token."""
        payload = build_cart_event(order, "updated")
        assert "person_id" not in payload

    def test_guest_cart_uses_guest_token(self, cart):
        """Without an email, the guest token identifies the shopper."""
        payload = build_cart_event(cart, CartAction.CREATED)

        assert payload["person_id"] == "guest-xyz"
        assert "email" not in payload
        assert payload["action"] == "created"

    def test_empty_email_counts_as_missing(self, cart):
        """An empty email falls back to the guest token."""
        cart.email = ""
        payload = build_cart_event(cart, "created")

        assert "email" not in payload
        assert payload["person_id"] == "guest-xyz"

    def test_no_contact_at_all(self, cart):
        """Without email and guest token, both keys are omitted."""
        cart.guest_token = None
        payload = build_cart_event(cart, "created")

        assert "email" not in payload
        assert "person_id" not in payload

    def test_without_urls(self, order):
        """URL fields are omitted without a storefront URL builder."""
        payload = build_cart_event(order, "created")

        assert "cart_url" not in payload
        assert "product_url" not in payload["items"][0]

    def test_cart_items_have_no_taxes(self, order, urls):
        """Cart line items do not report taxes."""
        item = build_cart_event(order, "created", urls)["items"][0]

        assert item == {
            "product_id": "7",
            "product_variant_id": "71",
            "sku": "TOTE-RED",
            "name": "Ruby Tote",
            "categories": ["Bags", "Accessories"],
            "price": 10.0,
            "quantity": 2,
            "discounts": 0.0,
            "total": 20.0,
            "product_url": "https://shop.example.com/products/ruby-tote",
        }

    def test_unknown_action_passes_through(self, order):
        """Actions are not validated locally."""
        assert build_cart_event(order, "abandoned")["action"] == "abandoned"

    def test_custom_provider(self, order):
        """The provider tag can be overridden."""
        assert build_cart_event(order, "created", provider="acme")["provider"] == "acme"


class TestOrderEvent:
    """Tests for build_order_event."""

    def test_placed_order_scenario(self, order, urls):
        """Order R100 placed by a@example.com."""
        payload = build_order_event(order, "placed", urls)

        assert payload["provider"] == "solidus"
        assert payload["email"] == "a@example.com"
        assert payload["action"] == "placed"
        assert payload["order_id"] == "100"
        assert payload["order_public_id"] == "R100"
        assert payload["grand_total"] == 42.5
        assert payload["total_taxes"] == 2.5
        assert payload["currency"] == "USD"
        assert payload["order_url"] == "https://shop.example.com/orders/R100"
        assert "person_id" not in payload
        assert "cart_id" not in payload

        [item] = payload["items"]
        assert item["quantity"] == 2
        assert item["price"] == 10.0
        assert item["total"] == 20.0
        assert item["taxes"] == 0.0

        assert "billing_address" in payload
        assert "shipping_address" in payload

    def test_order_action_enum(self, order):
        """Enum actions are sent as their string value."""
        assert build_order_event(order, OrderAction.REFUNDED)["action"] == "refunded"

    def test_guest_order_uses_guest_token(self, order):
        """Guest checkout without email reports the guest token."""
        order.email = None
        payload = build_order_event(order, "placed")

        assert payload["person_id"] == "guest-abc"
        assert "email" not in payload

    def test_billing_address_record(self, order):
        """Billing address fields use Drip names and the state abbreviation."""
        payload = build_order_event(order, "placed")

        assert payload["billing_address"] == {
            "company": "Acme",
            "address_1": "1 Billing Way",
            "address_2": "Suite 5",
            "city": "Bethesda",
            "state": "MD",
            "postal_code": "20814",
            "country": "United States",
            "phone": "555-0100",
            "first_name": "Billy",
            "last_name": "Payer",
        }

    def test_shipping_address_falls_back_to_state_name(self, order):
        """Addresses without a state record use the free-form state name."""
        shipping = build_order_event(order, "placed")["shipping_address"]

        assert shipping["state"] == "Oregon"
        assert "company" not in shipping
        assert "address_2" not in shipping
        assert shipping["first_name"] == "Sam"

    def test_mirror_shipping_name(self, order):
        """Legacy mode reports the shipping recipient on both addresses."""
        payload = build_order_event(order, "placed", mirror_shipping_name=True)

        assert payload["billing_address"]["first_name"] == "Sam"
        assert payload["billing_address"]["last_name"] == "Receiver"
        assert payload["billing_address"]["city"] == "Bethesda"

    def test_combined_name_mode(self, order):
        """Combined-name storefronts split each address's own name."""
        order.billing_address.name = "Mary Ann  Smith"
        payload = build_order_event(order, "placed", combined_name=True)

        assert payload["billing_address"]["first_name"] == "Mary"
        assert payload["billing_address"]["last_name"] == "Ann Smith"
        assert payload["shipping_address"]["first_name"] == "Sam"

    def test_combined_name_single_word(self, order):
        """A single-word name has no last name."""
        order.shipping_address.name = "Cher"
        shipping = build_order_event(order, "placed", combined_name=True)["shipping_address"]

        assert shipping["first_name"] == "Cher"
        assert "last_name" not in shipping

    def test_missing_addresses_are_omitted(self, cart):
        """Orders without addresses send no address keys."""
        payload = build_order_event(cart, "placed")

        assert "billing_address" not in payload
        assert "shipping_address" not in payload

    def test_no_null_values(self, cart):
        """No key anywhere in the payload holds None."""
        payload = build_order_event(cart, "placed")

        assert None not in payload.values()
        for item in payload["items"]:
            assert None not in item.values()

    def test_build_is_deterministic(self, order, urls):
        """Building twice from an unchanged order gives identical JSON."""
        first = json.dumps(build_order_event(order, "placed", urls))
        second = json.dumps(build_order_event(order, "placed", urls))
        assert first == second


class TestLineItems:
    """Tests for line item records."""

    def test_product_without_taxons_keeps_empty_categories(self):
        """Products with no taxons send an empty category list."""
        line_item = LineItem(
            product=Product(id=3, name="Plain"),
            variant_id=None,
            quantity=1,
            price=Decimal("4.00"),
        )
        record = build_line_item(line_item)

        assert record["categories"] == []
        assert "product_variant_id" not in record
        assert "sku" not in record
        assert record["total"] == 4.0

    def test_include_taxes(self, order):
        """Order line items report additional tax."""
        order.line_items[0].additional_tax_total = Decimal("1.25")
        record = build_line_item(order.line_items[0], include_taxes=True)
        assert record["taxes"] == 1.25

    def test_product_url_falls_back_to_id(self, urls):
        """Products without a slug link by id."""
        line_item = LineItem(
            product=Product(id=3),
            variant_id=30,
            quantity=1,
            price=Decimal("4.00"),
        )
        assert build_line_item(line_item, urls)["product_url"] == "https://shop.example.com/products/3"


class TestAddress:
    """Tests for build_address."""

    def test_none_address(self):
        assert build_address(None) is None

    def test_empty_address(self):
        """An address with nothing set produces an empty record."""
        assert build_address(Address()) == {}

    def test_name_source(self, billing_address, shipping_address):
        """Names can be read from another address."""
        record = build_address(billing_address, name_source=shipping_address)
        assert record["first_name"] == "Sam"


class TestProductEvent:
    """Tests for build_product_event."""

    def test_product_event(self, product, urls):
        """Product events describe a single variant."""
        variant = Variant(
            id=71,
            product=product,
            sku="TOTE-RED",
            price=Decimal("10.00"),
            total_on_hand=12,
            image_url="https://cdn.example.com/tote.png",
            updated_at=datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
        )
        payload = build_product_event(variant, ProductAction.UPDATED, urls)

        assert payload == {
            "provider": "solidus",
            "action": "updated",
            "occurred_at": "2024-01-15T10:30:00Z",
            "product_id": "7",
            "product_variant_id": "71",
            "sku": "TOTE-RED",
            "name": "Ruby Tote",
            "brand": "Solidus",
            "categories": ["Bags", "Accessories"],
            "price": 10.0,
            "inventory": 12,
            "product_url": "https://shop.example.com/products/ruby-tote",
            "image_url": "https://cdn.example.com/tote.png",
        }

    def test_product_event_without_price(self):
        """A variant without price and stock info still builds."""
        variant = Variant(id=1, product=Product(id=2))
        payload = build_product_event(variant, "deleted")

        assert payload["price"] == 0.0
        assert payload["categories"] == []
        assert "inventory" not in payload
        assert "name" not in payload
