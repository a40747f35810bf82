"""CLI commands for the GiftCard aggregate."""

from __future__ import annotations

from datetime import datetime

import click

from calor.application.check_gift_card import CheckGiftCardHandler
from calor.application.issue_gift_card import IssueGiftCardHandler
from calor.domain.exceptions import DomainException
from calor.domain.model.value_objects import Money
from calor.infrastructure.bootstrap import gift_card_repository
from calor.infrastructure.cli.dates import utc_end_of_day


@click.command("issue")
@click.option("--balance", required=True, help="Balance (e.g. 25.00).")
@click.option("--code", default=None, help="Card code; generated when omitted.")
@click.option("--expires-at", default=None, type=click.DateTime(["%Y-%m-%d"]))
def gift_card_issue(balance: str, code: str | None, expires_at: datetime | None) -> None:
    """Issue a new gift card."""
    handler = IssueGiftCardHandler(gift_card_repo=gift_card_repository())

    try:
        dto = handler.handle(
            balance_cents=Money.of(balance).cents,
            code=code,
            expires_at=utc_end_of_day(expires_at),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Gift card {dto.code} issued with {dto.balance}")


@click.command("check")
@click.option("--code", required=True, help="Gift card code.")
def gift_card_check(code: str) -> None:
    """Show a gift card's remaining balance."""
    handler = CheckGiftCardHandler(gift_card_repo=gift_card_repository())

    try:
        dto = handler.handle(code)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Gift card {dto.code}: {dto.balance} remaining")
    if dto.expires_at:
        click.echo(f"Expires: {dto.expires_at}")
