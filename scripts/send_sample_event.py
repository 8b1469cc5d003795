#!/usr/bin/env python
"""Send a sample cart or order activity event to a Drip account."""

import argparse
import asyncio
import json
import sys
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from storefront_drip.config import DripConfig, get_settings
from storefront_drip.models import (
    Address,
    CartAction,
    Country,
    LineItem,
    Order,
    OrderAction,
    Product,
    State,
    Taxon,
)
from storefront_drip.observability import configure_logging
from storefront_drip.shopper_activity import ShopperActivity


def sample_order(email: str | None) -> Order:
    """A small completed order with one line item."""
    product = Product(id=1, name="Ruby Tote", slug="ruby-tote", taxons=[Taxon("Bags")])
    address = Address(
        address1="10 Lovely Street",
        city="Herndon",
        zipcode="35005",
        phone="555-555-0199",
        state=State(abbr="AL", name="Alabama"),
        country=Country(name="United States", iso="US"),
        name="Jane Doe",
        firstname="Jane",
        lastname="Doe",
    )
    return Order(
        id=1001,
        number="R100000001",
        email=email,
        guest_token="sample-guest-token",
        total=Decimal("25.00"),
        tax_total=Decimal("2.50"),
        line_items=[
            LineItem(
                product=product,
                variant_id=11,
                sku="TOTE-RED",
                name="Ruby Tote",
                quantity=1,
                price=Decimal("22.50"),
                additional_tax_total=Decimal("2.50"),
            )
        ],
        billing_address=address,
        shipping_address=address,
        updated_at=datetime.now(timezone.utc),
        state="complete",
    )


async def main() -> None:
    parser = argparse.ArgumentParser(description="Send a sample shopper activity event to Drip")
    parser.add_argument(
        "--event",
        choices=["cart", "order"],
        default="order",
        help="Event type (default: order)",
    )
    parser.add_argument("--action", help="Activity action (default: created / placed)")
    parser.add_argument("--email", help="Contact email; omitted events use the guest token")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the payload instead of sending it",
    )
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(level=settings.log_level, json_format=settings.log_json)
    order = sample_order(args.email)

    if args.event == "cart":
        action = args.action or CartAction.CREATED.value
    else:
        action = args.action or OrderAction.PLACED.value

    activity = ShopperActivity(DripConfig.from_settings(settings))
    if args.dry_run:
        if args.event == "cart":
            payload = activity.cart_payload(order, action)
        else:
            payload = activity.order_payload(order, action)
        print(json.dumps(payload, indent=2))
        return

    try:
        if args.event == "cart":
            await activity.send_cart_activity(order, action)
        else:
            await activity.send_order_activity(order, action)
        print(f"Drip accepted {args.event} activity '{action}' for {order.number}")
    finally:
        await activity.close()


if __name__ == "__main__":
    asyncio.run(main())
