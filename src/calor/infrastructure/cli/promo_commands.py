"""CLI commands for the PromoCode aggregate."""

from __future__ import annotations

from datetime import datetime

import click

from calor.application.add_promotion import AddPromotionHandler
from calor.application.list_promotions import ListPromotionsHandler
from calor.domain.exceptions import DomainException
from calor.domain.model.promotion import PromoType
from calor.domain.model.value_objects import Money
from calor.infrastructure.bootstrap import promotion_repository
from calor.infrastructure.cli.dates import utc_end_of_day, utc_start_of_day


@click.command("add")
@click.option("--code", required=True, help="Promo code (case-insensitive).")
@click.option(
    "--type", "promo_type", required=True,
    type=click.Choice([t.value for t in PromoType]), help="Discount type.",
)
@click.option(
    "--value", default=0, type=int,
    help="Percent for 'percentage', cents for 'fixed_amount'.",
)
@click.option("--name", default="", help="Display name.")
@click.option("--min-order", default="0", help="Minimum subtotal (e.g. 50.00).")
@click.option("--usage-limit", default=None, type=int, help="Maximum uses.")
@click.option(
    "--max-discount", default=None, help="Discount cap for percentage promos (e.g. 20.00).",
)
@click.option("--starts-at", default=None, type=click.DateTime(["%Y-%m-%d"]))
@click.option("--ends-at", default=None, type=click.DateTime(["%Y-%m-%d"]))
def promo_add(
    code: str,
    promo_type: str,
    value: int,
    name: str,
    min_order: str,
    usage_limit: int | None,
    max_discount: str | None,
    starts_at: datetime | None,
    ends_at: datetime | None,
) -> None:
    """Create a promo code."""
    handler = AddPromotionHandler(promo_repo=promotion_repository())

    try:
        promo = handler.handle(
            code=code,
            promo_type=promo_type,
            value=value,
            name=name,
            minimum_order_cents=Money.of(min_order).cents,
            usage_limit=usage_limit,
            max_discount_cents=Money.of(max_discount).cents if max_discount else None,
            starts_at=utc_start_of_day(starts_at),
            ends_at=utc_end_of_day(ends_at),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Promo {promo.code} added ({promo.type.value}, value={promo.value})")


@click.command("list")
def promo_list() -> None:
    """List all promo codes."""
    promos = ListPromotionsHandler(promo_repo=promotion_repository()).handle()

    if not promos:
        click.echo("No promo codes found.")
        return

    click.echo(f"{'Code':<14} {'Type':<14} {'Value':>6} {'Min order':>10} {'Uses':>14} {'Active':>7}")
    click.echo("-" * 70)
    for p in promos:
        click.echo(
            f"{p.code:<14} {p.type:<14} {p.value:>6} {p.minimum_order:>10} "
            f"{p.uses:>14} {'yes' if p.active else 'no':>7}"
        )
