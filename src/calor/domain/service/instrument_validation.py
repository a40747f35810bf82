"""Domain service: Instrument Validation.

Turns the codes a customer attached at checkout into the read-only
snapshots the composer works with, rejecting codes that cannot be used.
Both the checkout preview and the order commit go through here, always
with freshly loaded records.
"""

from __future__ import annotations

from datetime import datetime, timezone

from calor.domain.exceptions import GiftCardInvalidError, PromoInvalidError
from calor.domain.model.discount import AppliedGiftCard, AppliedPromo
from calor.domain.model.gift_card import GiftCard
from calor.domain.model.loyalty import LoyaltyAccount
from calor.domain.model.promotion import PromoCode
from calor.domain.repository.gift_card_repository import GiftCardRepository
from calor.domain.repository.loyalty_repository import LoyaltyAccountRepository
from calor.domain.repository.promotion_repository import PromotionRepository


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PromoValidator:

    def __init__(self, promo_repo: PromotionRepository) -> None:
        self._promo_repo = promo_repo

    def load(self, code: str, now: datetime | None = None) -> PromoCode:
        """Fetch a redeemable promo or raise PromoInvalidError."""
        if not code or not code.strip():
            raise PromoInvalidError("Promo code is required")
        promo = self._promo_repo.get_by_code(code)
        if promo is None:
            raise PromoInvalidError(f"Invalid promo code: '{code.strip()}'")
        promo.check_redeemable(now or _utcnow())
        return promo

    def validate(
        self, code: str, subtotal_cents: int, now: datetime | None = None
    ) -> AppliedPromo:
        """Check the code end to end, including minimum spend."""
        promo = self.load(code, now)
        promo.check_eligible(subtotal_cents)
        return AppliedPromo(
            type=promo.type,
            value=promo.value,
            minimum_order_cents=promo.minimum_order_cents,
            max_discount_cents=promo.max_discount_cents,
        )


class GiftCardValidator:

    def __init__(self, gift_card_repo: GiftCardRepository) -> None:
        self._gift_card_repo = gift_card_repo

    def load(self, code: str, now: datetime | None = None) -> GiftCard:
        if not code or not code.strip():
            raise GiftCardInvalidError("Gift card code is required")
        card = self._gift_card_repo.get_by_code(code)
        if card is None:
            raise GiftCardInvalidError(f"Invalid gift card code: '{code.strip()}'")
        card.check_usable(now or _utcnow())
        return card

    def validate(self, code: str, now: datetime | None = None) -> AppliedGiftCard:
        card = self.load(code, now)
        return AppliedGiftCard(available_balance_cents=card.balance_cents)


def points_available(
    loyalty_repo: LoyaltyAccountRepository, customer_id: str | None
) -> int:
    """Current points balance; guests and customers without an account have 0."""
    if not customer_id:
        return 0
    account = loyalty_repo.get_by_customer_id(customer_id)
    return account.points if account is not None else 0


def loyalty_account_or_empty(
    loyalty_repo: LoyaltyAccountRepository, customer_id: str
) -> LoyaltyAccount:
    account = loyalty_repo.get_by_customer_id(customer_id)
    if account is None:
        return LoyaltyAccount(customer_id=customer_id)
    return account
