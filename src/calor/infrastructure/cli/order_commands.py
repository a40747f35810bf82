"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from calor.application.dto import OrderDTO
from calor.application.show_order import ShowOrderHandler
from calor.domain.exceptions import DomainException
from calor.infrastructure.bootstrap import order_repository


def display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}")
    click.echo(f"Customer: {dto.customer_id}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<16} {'Variant':<10} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*55}")
    for item in dto.items:
        click.echo(
            f"  {item.product_id:<16} {item.variant_id or '-':<10} {item.quantity:>5} "
            f"{item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*55}")
    click.echo(f"  {'Subtotal':<35} {dto.subtotal:>20}")
    click.echo(f"  {'Shipping':<35} {dto.shipping:>20}")
    if dto.promo_code:
        click.echo(f"  {'Promo ' + dto.promo_code:<35} {'-' + dto.promo_discount:>20}")
    if dto.gift_card_code:
        click.echo(
            f"  {'Gift card ' + dto.gift_card_code:<35} {'-' + dto.gift_card_discount:>20}"
        )
    if dto.points_used:
        click.echo(
            f"  {f'Points ({dto.points_used})':<35} {'-' + dto.points_discount:>20}"
        )
    click.echo(f"  {'Order Total':<35} {dto.total:>20}")
    if dto.points_earned:
        click.echo(f"Points earned: {dto.points_earned}")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of a placed order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_order(dto)
