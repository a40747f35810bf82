"""CLI commands for loyalty accounts."""

from __future__ import annotations

import click

from calor.application.award_points import AwardPointsHandler
from calor.application.show_loyalty import ShowLoyaltyHandler
from calor.domain.exceptions import DomainException
from calor.infrastructure.bootstrap import loyalty_repository


@click.command("show")
@click.option("--customer", required=True, help="Customer ID.")
def loyalty_show(customer: str) -> None:
    """Show a customer's points balance."""
    dto = ShowLoyaltyHandler(loyalty_repo=loyalty_repository()).handle(customer)
    click.echo(f"Customer {dto.customer_id}: {dto.points} points (worth {dto.redeemable})")
    click.echo(f"Lifetime points: {dto.lifetime_points}")


@click.command("award")
@click.option("--customer", required=True, help="Customer ID.")
@click.option("--points", required=True, type=int, help="Points to add.")
def loyalty_award(customer: str, points: int) -> None:
    """Credit points to a customer."""
    handler = AwardPointsHandler(loyalty_repo=loyalty_repository())

    try:
        dto = handler.handle(customer, points)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Awarded {points} points to {dto.customer_id} (balance {dto.points})")
