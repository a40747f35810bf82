"""Order aggregate — the record written when a checkout commits.

The Order stores only the final resolved amounts; the discount breakdown
that produced them is never persisted on its own.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from calor.domain.exceptions import ValidationError
from calor.domain.model.cart import MAX_LINE_ITEMS, CartLineItem
from calor.domain.model.discount import DiscountComposition


@dataclass
class Order:
    """Aggregate root for committed orders.

    Use the ``Order.create()`` factory for new orders; it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    customer_id: str
    items: list[CartLineItem]
    subtotal_cents: int
    shipping_cents: int
    total_cents: int
    promo_code: str | None = None
    promo_discount_cents: int = 0
    gift_card_code: str | None = None
    gift_card_discount_cents: int = 0
    points_used: int = 0
    points_discount_cents: int = 0
    points_earned: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        customer_id: str,
        items: list[CartLineItem],
        composition: DiscountComposition,
        promo_code: str | None = None,
        gift_card_code: str | None = None,
        points_earned: int = 0,
    ) -> Order:
        """Create a new order from a resolved discount composition."""
        if not customer_id or not customer_id.strip():
            raise ValidationError("Customer ID is required")

        if not items:
            raise ValidationError("Order must contain at least one item")

        if len(items) > MAX_LINE_ITEMS:
            raise ValidationError(f"Maximum {MAX_LINE_ITEMS} items per order")

        subtotal = sum(item.line_total_cents for item in items)
        if subtotal != composition.subtotal_cents:
            raise ValidationError(
                f"Line items add up to {subtotal} cents but the composition "
                f"was computed for {composition.subtotal_cents}"
            )

        return Order(
            id=None,
            customer_id=customer_id.strip(),
            items=list(items),
            subtotal_cents=composition.subtotal_cents,
            shipping_cents=composition.shipping_cents,
            total_cents=composition.grand_total_cents,
            promo_code=promo_code,
            promo_discount_cents=composition.promo_discount_cents,
            gift_card_code=gift_card_code if composition.gift_card_discount_cents else None,
            gift_card_discount_cents=composition.gift_card_discount_cents,
            points_used=composition.points_consumed,
            points_discount_cents=composition.points_discount_cents,
            points_earned=points_earned,
        )

    @property
    def discount_cents(self) -> int:
        return (
            self.promo_discount_cents
            + self.gift_card_discount_cents
            + self.points_discount_cents
        )
