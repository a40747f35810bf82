"""LoyaltyAccount aggregate — per-customer points balance.

Points convert to discount at a fixed rate: 100 points = 1 currency unit.
"""

from __future__ import annotations

from dataclasses import dataclass

from calor.domain.exceptions import InsufficientPointsError, ValidationError

POINTS_PER_UNIT = 100
CENTS_PER_UNIT = 100


def normalize_customer_id(customer_id: str | None) -> str | None:
    """Strip surrounding whitespace; blank IDs become None (a guest)."""
    if customer_id is None:
        return None
    return customer_id.strip() or None


def redeemable_value_cents(points: int) -> int:
    """Discount value of *points*, counting whole currency units only."""
    return (points // POINTS_PER_UNIT) * CENTS_PER_UNIT


def points_earned_for(total_cents: int) -> int:
    """One point per whole currency unit charged."""
    return total_cents // CENTS_PER_UNIT


@dataclass
class LoyaltyAccount:
    """Aggregate root for loyalty points.

    Invariant: ``points`` is never negative.
    """

    customer_id: str
    points: int = 0
    lifetime_points: int = 0

    def __post_init__(self) -> None:
        if not self.customer_id:
            raise ValidationError("Loyalty account needs a customer ID")
        if self.points < 0:
            raise ValidationError("Loyalty points cannot be negative")

    @property
    def redeemable_cents(self) -> int:
        return redeemable_value_cents(self.points)

    def redeem(self, points: int) -> None:
        if points <= 0:
            raise ValidationError("Redeemed points must be positive")
        if points > self.points:
            raise InsufficientPointsError(requested=points, available=self.points)
        self.points -= points

    def award(self, points: int) -> None:
        if points <= 0:
            raise ValidationError("Awarded points must be positive")
        self.points += points
        self.lifetime_points += points

    def refund(self, points: int) -> None:
        """Give back points from a redemption that did not go through."""
        if points <= 0:
            raise ValidationError("Refunded points must be positive")
        self.points += points
