"""Cart and its line items.

The cart is owned by the storefront session; checkout only reads it to
derive the subtotal.  Unit prices are captured in cents at the moment the
line was added.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from calor.domain.exceptions import ValidationError
from calor.domain.model.value_objects import Quantity

MAX_LINE_ITEMS = 50


@dataclass(frozen=True)
class CartLineItem:
    product_id: str
    variant_id: str | None
    unit_price_cents: int
    quantity: Quantity

    def __post_init__(self) -> None:
        if not self.product_id:
            raise ValidationError("Line item needs a product ID")
        if not isinstance(self.unit_price_cents, int) or self.unit_price_cents < 0:
            raise ValidationError(
                f"Unit price must be a non-negative number of cents, "
                f"got {self.unit_price_cents!r}"
            )

    @property
    def line_total_cents(self) -> int:
        return self.unit_price_cents * self.quantity.value


@dataclass
class Cart:
    """A customer's basket at checkout time."""

    items: list[CartLineItem] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.items) > MAX_LINE_ITEMS:
            raise ValidationError(f"Maximum {MAX_LINE_ITEMS} items per order")

    @property
    def subtotal_cents(self) -> int:
        return sum(item.line_total_cents for item in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items
