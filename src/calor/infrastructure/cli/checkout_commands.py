"""CLI commands for pricing and placing checkouts."""

from __future__ import annotations

import click

from calor.application.dto import CheckoutItemSpec, CheckoutRequest
from calor.application.place_order import PlaceOrderHandler
from calor.application.quote_checkout import QuoteCheckoutHandler
from calor.domain.exceptions import DomainException
from calor.infrastructure.bootstrap import (
    gift_card_repository,
    loyalty_repository,
    order_repository,
    promotion_repository,
    shipping_policy,
)
from calor.infrastructure.cli.order_commands import display_order


def _parse_item(raw: str) -> CheckoutItemSpec:
    """Parse 'PRODUCT:VARIANT:UNIT_CENTS:QTY' (VARIANT may be empty)."""
    parts = [p.strip() for p in raw.split(":")]
    if len(parts) != 4 or not parts[0]:
        raise click.BadParameter(
            f"Invalid item format '{raw}'. Expected 'PRODUCT:VARIANT:UNIT_CENTS:QTY'."
        )
    product_id, variant_id, price_str, qty_str = parts
    try:
        price = int(price_str)
    except ValueError:
        raise click.BadParameter(
            f"Invalid unit price '{price_str}' for product '{product_id}'."
        )
    try:
        qty = int(qty_str)
    except ValueError:
        raise click.BadParameter(
            f"Invalid quantity '{qty_str}' for product '{product_id}'."
        )
    return CheckoutItemSpec(
        product_id=product_id,
        variant_id=variant_id or None,
        unit_price_cents=price,
        quantity=qty,
    )


def _build_request(
    items: tuple[str, ...],
    customer: str | None,
    promo_code: str | None,
    gift_card: str | None,
    points: int,
) -> CheckoutRequest:
    return CheckoutRequest(
        items=[_parse_item(raw) for raw in items],
        customer_id=customer,
        promo_code=promo_code,
        gift_card_code=gift_card,
        points_requested=points,
    )


_item_option = click.option(
    "--item", "items", multiple=True, required=True,
    help="Cart line as 'PRODUCT:VARIANT:UNIT_CENTS:QTY'. Repeatable.",
)
_promo_option = click.option("--promo", "promo_code", default=None, help="Promo code.")
_gift_card_option = click.option("--gift-card", default=None, help="Gift card code.")
_points_option = click.option(
    "--points", default=0, show_default=True, type=click.IntRange(min=0),
    help="Loyalty points to redeem (100 points = $1).",
)


@click.command("quote")
@_item_option
@click.option("--customer", default=None, help="Customer ID (for loyalty points).")
@_promo_option
@_gift_card_option
@_points_option
def checkout_quote(
    items: tuple[str, ...],
    customer: str | None,
    promo_code: str | None,
    gift_card: str | None,
    points: int,
) -> None:
    """Preview the order summary for a cart."""
    request = _build_request(items, customer, promo_code, gift_card, points)
    handler = QuoteCheckoutHandler(
        promo_repo=promotion_repository(),
        gift_card_repo=gift_card_repository(),
        loyalty_repo=loyalty_repository(),
        shipping_policy=shipping_policy(),
    )

    try:
        summary = handler.handle(request)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    shipping = "FREE" if summary.free_shipping else summary.shipping
    click.echo(f"  {'Subtotal':<24} {summary.subtotal:>12}")
    click.echo(f"  {'Shipping':<24} {shipping:>12}")
    click.echo(f"  {'Promo discount':<24} {'-' + summary.promo_discount:>12}")
    click.echo(f"  {'Gift card':<24} {'-' + summary.gift_card_discount:>12}")
    click.echo(
        f"  {f'Points ({summary.points_used})':<24} {'-' + summary.points_discount:>12}"
    )
    click.echo(f"  {'-'*37}")
    click.echo(f"  {'Total':<24} {summary.total:>12}")
    for notice in summary.notices:
        click.echo(f"Note: {notice}")


@click.command("place")
@_item_option
@click.option("--customer", required=True, help="Customer ID.")
@_promo_option
@_gift_card_option
@_points_option
@click.option(
    "--expected-total", required=True, type=click.IntRange(min=0),
    help="Total in cents the customer was shown and is about to pay.",
)
def checkout_place(
    items: tuple[str, ...],
    customer: str,
    promo_code: str | None,
    gift_card: str | None,
    points: int,
    expected_total: int,
) -> None:
    """Place an order, re-validating the total the customer was shown."""
    request = _build_request(items, customer, promo_code, gift_card, points)
    handler = PlaceOrderHandler(
        order_repo=order_repository(),
        promo_repo=promotion_repository(),
        gift_card_repo=gift_card_repository(),
        loyalty_repo=loyalty_repository(),
        shipping_policy=shipping_policy(),
    )

    try:
        dto = handler.handle(request, expected_total_cents=expected_total)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} placed.")
    display_order(dto)
