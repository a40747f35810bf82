"""Domain service: Discount Composer.

Combines a subtotal, a shipping charge and up to three discount
instruments into one grand total.  Instruments are applied in a fixed
order that customers and support staff rely on:

  1. promo code   (percentage / fixed amount / free shipping)
  2. gift card    (store credit, against what the promo left)
  3. loyalty points, last, against whatever remains

Reordering these changes customer-facing totals.

The composer is a pure function: it reads plain values, performs no I/O
and keeps no state, so the checkout preview and the order commit can both
call it and must agree.
"""

from __future__ import annotations

from calor.domain.exceptions import (
    GiftCardEmptyError,
    InsufficientPointsError,
    PromoNotEligibleError,
    ValidationError,
)
from calor.domain.model.discount import (
    AppliedGiftCard,
    AppliedPromo,
    DiscountComposition,
)
from calor.domain.model.loyalty import CENTS_PER_UNIT, POINTS_PER_UNIT
from calor.domain.model.promotion import PromoType
from calor.domain.model.value_objects import format_cents


def compose(
    subtotal_cents: int,
    shipping_cents: int,
    promo: AppliedPromo | None = None,
    gift_card: AppliedGiftCard | None = None,
    points_requested: int = 0,
    points_available: int = 0,
) -> DiscountComposition:
    """Compute the grand total and what each instrument contributes.

    Raises:
        PromoNotEligibleError: subtotal is below the promo's minimum spend.
        GiftCardEmptyError: a gift card was attached with a zero balance.
        InsufficientPointsError: more points requested than available.
        ValidationError: any amount is negative.
    """
    _require_non_negative(
        subtotal_cents=subtotal_cents,
        shipping_cents=shipping_cents,
        points_requested=points_requested,
        points_available=points_available,
    )

    pre_discount_total = subtotal_cents + shipping_cents

    promo_discount = 0
    if promo is not None:
        promo_discount = promo_discount_cents(promo, subtotal_cents, shipping_cents)
    remaining = pre_discount_total - promo_discount

    gift_card_discount = 0
    if gift_card is not None:
        if gift_card.available_balance_cents == 0:
            raise GiftCardEmptyError("Gift card has no remaining balance")
        gift_card_discount = min(gift_card.available_balance_cents, remaining)
    remaining -= gift_card_discount

    if points_requested > points_available:
        raise InsufficientPointsError(
            requested=points_requested, available=points_available
        )
    points_discount, points_consumed = points_discount_cents(points_requested, remaining)
    remaining -= points_discount

    return DiscountComposition(
        subtotal_cents=subtotal_cents,
        shipping_cents=shipping_cents,
        promo_discount_cents=promo_discount,
        gift_card_discount_cents=gift_card_discount,
        points_discount_cents=points_discount,
        points_consumed=points_consumed,
        grand_total_cents=max(0, remaining),
        free_shipping=promo is not None and promo.type == PromoType.FREE_SHIPPING,
    )


def promo_discount_cents(
    promo: AppliedPromo, subtotal_cents: int, shipping_cents: int
) -> int:
    """Discount a promo yields on its own; never more than it can cover."""
    if subtotal_cents < promo.minimum_order_cents:
        raise PromoNotEligibleError(
            f"Minimum order of {format_cents(promo.minimum_order_cents)} required",
            minimum_order_cents=promo.minimum_order_cents,
        )

    if promo.type == PromoType.PERCENTAGE:
        discount = subtotal_cents * promo.value // 100
        if promo.max_discount_cents is not None:
            discount = min(discount, promo.max_discount_cents)
        return min(discount, subtotal_cents)

    if promo.type == PromoType.FIXED_AMOUNT:
        return min(promo.value, subtotal_cents)

    # FREE_SHIPPING: subtotal untouched
    return shipping_cents


def points_discount_cents(points_requested: int, remaining_cents: int) -> tuple[int, int]:
    """Return ``(discount_cents, points_consumed)`` for a points request.

    Only whole currency units are redeemed, so the discount is a multiple
    of ``CENTS_PER_UNIT`` and the points consumed a multiple of
    ``POINTS_PER_UNIT``.  Partial units are clamped down, never rounded up.
    """
    units = min(points_requested // POINTS_PER_UNIT, max(0, remaining_cents) // CENTS_PER_UNIT)
    return units * CENTS_PER_UNIT, units * POINTS_PER_UNIT


def _require_non_negative(**amounts: int) -> None:
    for name, value in amounts.items():
        if not isinstance(value, int):
            raise ValidationError(f"{name} must be an integer, got {type(value).__name__}")
        if value < 0:
            raise ValidationError(f"{name} cannot be negative, got {value}")
