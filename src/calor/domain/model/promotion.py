"""PromoCode aggregate — admin-issued discount instruments.

The composer never mutates a promo; only the order commit touches
``times_used``, through the repository's conditional increment.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from calor.domain.exceptions import (
    PromoInvalidError,
    PromoNotEligibleError,
    ValidationError,
)
from calor.domain.model.value_objects import format_cents


class PromoType(Enum):
    PERCENTAGE = "percentage"
    FIXED_AMOUNT = "fixed_amount"
    FREE_SHIPPING = "free_shipping"


@dataclass
class PromoCode:
    """Aggregate root for promotions.

    ``value`` means a percent (1..100) for PERCENTAGE, cents for
    FIXED_AMOUNT and is ignored for FREE_SHIPPING.

    Invariants:
    - ``times_used`` never exceeds ``usage_limit`` (when one is set)
    - ``code`` is stored upper-case
    """

    code: str
    type: PromoType
    value: int
    name: str = ""
    minimum_order_cents: int = 0
    usage_limit: int | None = None
    times_used: int = 0
    max_discount_cents: int | None = None
    is_active: bool = True
    starts_at: datetime | None = None
    ends_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.code or not self.code.strip():
            raise ValidationError("Promo code is required")
        self.code = normalize_code(self.code)
        if self.value < 0:
            raise ValidationError("Promo value cannot be negative")
        if self.type == PromoType.PERCENTAGE and not 0 < self.value <= 100:
            raise ValidationError(
                f"Percentage promo value must be between 1 and 100, got {self.value}"
            )
        if self.minimum_order_cents < 0:
            raise ValidationError("Minimum order cannot be negative")
        if self.usage_limit is not None and self.usage_limit < 0:
            raise ValidationError("Usage limit cannot be negative")
        if self.max_discount_cents is not None and self.max_discount_cents < 0:
            raise ValidationError("Maximum discount cannot be negative")

    @property
    def is_exhausted(self) -> bool:
        return self.usage_limit is not None and self.times_used >= self.usage_limit

    def check_redeemable(self, now: datetime) -> None:
        """Raise PromoInvalidError unless the code can be used at *now*."""
        if not self.is_active:
            raise PromoInvalidError(f"Promo code {self.code} is no longer active")
        if self.starts_at is not None and self.starts_at > now:
            raise PromoInvalidError(f"Promo code {self.code} is not yet active")
        if self.ends_at is not None and self.ends_at < now:
            raise PromoInvalidError(f"Promo code {self.code} has expired")
        if self.is_exhausted:
            raise PromoInvalidError(
                f"Promo code {self.code} has reached its usage limit"
            )

    def check_eligible(self, subtotal_cents: int) -> None:
        if subtotal_cents < self.minimum_order_cents:
            raise PromoNotEligibleError(
                f"Minimum order of {format_cents(self.minimum_order_cents)} "
                f"required for {self.code}",
                minimum_order_cents=self.minimum_order_cents,
            )

    def record_usage(self) -> None:
        if self.is_exhausted:
            raise PromoInvalidError(
                f"Promo code {self.code} has reached its usage limit"
            )
        self.times_used += 1

    def release_usage(self) -> None:
        if self.times_used <= 0:
            raise ValidationError(f"Promo code {self.code} has no usage to release")
        self.times_used -= 1


def normalize_code(code: str) -> str:
    return code.strip().upper()
