"""GiftCard aggregate — stored-value instrument with a decrementing balance."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from calor.domain.exceptions import (
    GiftCardEmptyError,
    GiftCardInvalidError,
    ValidationError,
)
from calor.domain.model.promotion import normalize_code
from calor.domain.model.value_objects import format_cents


@dataclass
class GiftCard:
    """Aggregate root for gift cards.

    Invariants:
    - ``balance_cents`` is always >= 0
    - a balance is decremented exactly once per committed order
    """

    code: str
    balance_cents: int
    initial_balance_cents: int | None = None
    expires_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.code or not self.code.strip():
            raise ValidationError("Gift card code is required")
        self.code = normalize_code(self.code)
        if self.balance_cents < 0:
            raise ValidationError("Gift card balance cannot be negative")
        if self.initial_balance_cents is None:
            self.initial_balance_cents = self.balance_cents

    @property
    def is_redeemed(self) -> bool:
        return self.balance_cents == 0

    def check_usable(self, now: datetime) -> None:
        if self.expires_at is not None and self.expires_at < now:
            raise GiftCardInvalidError(f"Gift card {self.code} has expired")
        if self.is_redeemed:
            raise GiftCardEmptyError(
                f"Gift card {self.code} has no remaining balance"
            )

    def debit(self, amount_cents: int) -> None:
        """Consume *amount_cents* of the balance."""
        if amount_cents <= 0:
            raise ValidationError("Debit amount must be positive")
        if amount_cents > self.balance_cents:
            raise GiftCardEmptyError(
                f"Gift card {self.code} cannot cover {format_cents(amount_cents)}"
                f"; only {format_cents(self.balance_cents)} remaining"
            )
        self.balance_cents -= amount_cents

    def credit(self, amount_cents: int) -> None:
        """Return a previous debit to the card (e.g. a failed commit)."""
        if amount_cents <= 0:
            raise ValidationError("Credit amount must be positive")
        self.balance_cents += amount_cents
