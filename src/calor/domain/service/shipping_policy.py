"""Domain service: Shipping Policy.

Free shipping at or above a subtotal threshold, a flat fee otherwise.
"""

from __future__ import annotations

from dataclasses import dataclass

from calor.domain.exceptions import ValidationError

DEFAULT_FREE_SHIPPING_THRESHOLD_CENTS = 7500
DEFAULT_FLAT_SHIPPING_CENTS = 1200


@dataclass(frozen=True)
class ShippingPolicy:
    free_threshold_cents: int = DEFAULT_FREE_SHIPPING_THRESHOLD_CENTS
    flat_fee_cents: int = DEFAULT_FLAT_SHIPPING_CENTS

    def __post_init__(self) -> None:
        if self.free_threshold_cents < 0 or self.flat_fee_cents < 0:
            raise ValidationError("Shipping amounts cannot be negative")

    def shipping_for(self, subtotal_cents: int) -> int:
        if subtotal_cents >= self.free_threshold_cents:
            return 0
        return self.flat_fee_cents
