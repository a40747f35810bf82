import click

from calor.infrastructure.bootstrap import settings
from calor.infrastructure.cli.checkout_commands import checkout_place, checkout_quote
from calor.infrastructure.cli.gift_card_commands import gift_card_check, gift_card_issue
from calor.infrastructure.cli.loyalty_commands import loyalty_award, loyalty_show
from calor.infrastructure.cli.order_commands import order_show
from calor.infrastructure.cli.promo_commands import promo_add, promo_list
from calor.infrastructure.config import ConfigurationError
from calor.infrastructure.log_config import configure_logging


@click.group()
def cli() -> None:
    """Calor — checkout and store credit administration"""
    try:
        current = settings()
    except ConfigurationError as exc:
        raise click.ClickException(str(exc))
    configure_logging(level=current.log_level, json=current.log_json)


@cli.group()
def checkout() -> None:
    """Price and place checkouts."""


@cli.group()
def promo() -> None:
    """Manage promo codes."""


@cli.group("gift-card")
def gift_card() -> None:
    """Manage gift cards."""


@cli.group()
def loyalty() -> None:
    """Manage loyalty points."""


@cli.group()
def order() -> None:
    """Inspect placed orders."""


# Register subcommands
checkout.add_command(checkout_quote)
checkout.add_command(checkout_place)
promo.add_command(promo_add)
promo.add_command(promo_list)
gift_card.add_command(gift_card_issue)
gift_card.add_command(gift_card_check)
loyalty.add_command(loyalty_show)
loyalty.add_command(loyalty_award)
order.add_command(order_show)
