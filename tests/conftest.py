"""Pytest configuration and fixtures."""

import sys
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from storefront_drip.config import DripConfig  # noqa: E402
from storefront_drip.models import (  # noqa: E402
    Address,
    Country,
    LineItem,
    Order,
    Product,
    State,
    Taxon,
)
from storefront_drip.urls import StorefrontUrls  # noqa: E402

UPDATED_AT = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def product() -> Product:
    """Product classified under two taxons."""
    return Product(
        id=7,
        name="Ruby Tote",
        slug="ruby-tote",
        brand="Solidus",
        taxons=[Taxon("Bags"), Taxon("Accessories")],
    )


@pytest.fixture
def billing_address() -> Address:
    return Address(
        company="Acme",
        address1="1 Billing Way",
        address2="Suite 5",
        city="Bethesda",
        zipcode="20814",
        phone="555-0100",
        state=State(abbr="MD", name="Maryland"),
        country=Country(name="United States", iso="US"),
        name="Billy Payer",
        firstname="Billy",
        lastname="Payer",
    )


@pytest.fixture
def shipping_address() -> Address:
    return Address(
        address1="2 Shipping Lane",
        city="Portland",
        zipcode="97201",
        phone="555-0200",
        state=None,
        state_name="Oregon",
        country=Country(name="United States", iso="US"),
        name="Sam Receiver",
        firstname="Sam",
        lastname="Receiver",
    )


@pytest.fixture
def order(product, billing_address, shipping_address) -> Order:
    """Order R100: one line item, quantity 2 at 10.00."""
    return Order(
        id=100,
        number="R100",
        email="a@example.com",
        guest_token="guest-abc",
        currency="USD",
        total=Decimal("42.50"),
        tax_total=Decimal("2.50"),
        promo_total=Decimal("-5.00"),
        line_items=[
            LineItem(
                product=product,
                variant_id=71,
                sku="TOTE-RED",
                name="Ruby Tote",
                quantity=2,
                price=Decimal("10.00"),
                total=Decimal("20.00"),
            )
        ],
        billing_address=billing_address,
        shipping_address=shipping_address,
        updated_at=UPDATED_AT,
        state="complete",
        completed_at=UPDATED_AT,
    )


@pytest.fixture
def cart(product) -> Order:
    """Guest cart without email or addresses."""
    return Order(
        id=200,
        number="R200",
        email=None,
        guest_token="guest-xyz",
        total=Decimal("10.00"),
        line_items=[
            LineItem(product=product, variant_id=71, quantity=1, price=Decimal("10.00"))
        ],
        updated_at=UPDATED_AT,
    )


@pytest.fixture
def urls() -> StorefrontUrls:
    return StorefrontUrls("https://shop.example.com/")


@pytest.fixture
def drip_config() -> DripConfig:
    return DripConfig(
        api_key="test-api-key",
        account_id="9999999",
        storefront_url="https://shop.example.com",
        enable_tracing=False,
        enable_metrics=False,
    )
