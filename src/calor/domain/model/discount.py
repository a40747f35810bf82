"""Inputs and output of the discount composer.

These are read-only snapshots taken from the stored instruments at
computation time.  Nothing here is persisted.
"""

from __future__ import annotations

from dataclasses import dataclass

from calor.domain.exceptions import ValidationError
from calor.domain.model.promotion import PromoType


@dataclass(frozen=True)
class AppliedPromo:
    """The parts of a promo code the composer needs."""

    type: PromoType
    value: int
    minimum_order_cents: int = 0
    max_discount_cents: int | None = None

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValidationError("Promo value cannot be negative")
        if self.type == PromoType.PERCENTAGE and self.value > 100:
            raise ValidationError("Percentage promo cannot exceed 100")


@dataclass(frozen=True)
class AppliedGiftCard:
    available_balance_cents: int

    def __post_init__(self) -> None:
        if self.available_balance_cents < 0:
            raise ValidationError("Gift card balance cannot be negative")


@dataclass(frozen=True)
class DiscountComposition:
    """Result of one composer run.

    ``promo_discount_cents`` for a FREE_SHIPPING promo comes off the
    shipping charge; every other discount comes off the running total.
    """

    subtotal_cents: int
    shipping_cents: int
    promo_discount_cents: int
    gift_card_discount_cents: int
    points_discount_cents: int
    points_consumed: int
    grand_total_cents: int
    free_shipping: bool = False

    @property
    def pre_discount_total_cents(self) -> int:
        return self.subtotal_cents + self.shipping_cents

    @property
    def total_discount_cents(self) -> int:
        return (
            self.promo_discount_cents
            + self.gift_card_discount_cents
            + self.points_discount_cents
        )

    @property
    def shipping_charged_cents(self) -> int:
        return 0 if self.free_shipping else self.shipping_cents
