"""Domain service: Instrument Redemption.

Applies the balance changes a composed checkout implies: one promo use,
one gift card debit, one points redemption.  Each change is a conditional
decrement at the repository, which refuses it when another checkout has
already used up the balance.

The changes are applied in composer order.  If a later one is refused,
the earlier ones are given back before the error is raised, so a failed
commit never leaves an instrument partially consumed.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from calor.domain.exceptions import (
    GiftCardEmptyError,
    InsufficientPointsError,
    PromoInvalidError,
)
from calor.domain.model.discount import DiscountComposition
from calor.domain.repository.gift_card_repository import GiftCardRepository
from calor.domain.repository.loyalty_repository import LoyaltyAccountRepository
from calor.domain.repository.promotion_repository import PromotionRepository

logger = structlog.get_logger()


class InstrumentRedemptionService:

    def __init__(
        self,
        promo_repo: PromotionRepository,
        gift_card_repo: GiftCardRepository,
        loyalty_repo: LoyaltyAccountRepository,
    ) -> None:
        self._promo_repo = promo_repo
        self._gift_card_repo = gift_card_repo
        self._loyalty_repo = loyalty_repo

    def redeem(
        self,
        composition: DiscountComposition,
        promo_code: str | None,
        gift_card_code: str | None,
        customer_id: str | None,
    ) -> None:
        undo: list[Callable[[], None]] = []
        try:
            if promo_code:
                if not self._promo_repo.record_usage(promo_code):
                    self._refused("promo", promo_code)
                    raise PromoInvalidError(
                        f"Promo code {promo_code} has reached its usage limit"
                    )
                undo.append(lambda: self._promo_repo.release_usage(promo_code))

            amount = composition.gift_card_discount_cents
            if gift_card_code and amount > 0:
                if not self._gift_card_repo.debit(gift_card_code, amount):
                    self._refused("gift_card", gift_card_code, amount=amount)
                    raise GiftCardEmptyError(
                        f"Gift card {gift_card_code} no longer covers the applied amount"
                    )
                undo.append(lambda: self._gift_card_repo.credit(gift_card_code, amount))

            points = composition.points_consumed
            if points > 0:
                if not customer_id or not self._loyalty_repo.redeem(customer_id, points):
                    self._refused("points", customer_id, amount=points)
                    account = (
                        self._loyalty_repo.get_by_customer_id(customer_id)
                        if customer_id
                        else None
                    )
                    raise InsufficientPointsError(
                        requested=points,
                        available=account.points if account is not None else 0,
                    )
        except Exception:
            for step in reversed(undo):
                step()
            raise

    def release(
        self,
        composition: DiscountComposition,
        promo_code: str | None,
        gift_card_code: str | None,
        customer_id: str | None,
    ) -> None:
        """Give back everything a successful ``redeem`` consumed."""
        if promo_code:
            self._promo_repo.release_usage(promo_code)
        if gift_card_code and composition.gift_card_discount_cents > 0:
            self._gift_card_repo.credit(
                gift_card_code, composition.gift_card_discount_cents
            )
        if customer_id and composition.points_consumed > 0:
            self._loyalty_repo.refund(customer_id, composition.points_consumed)

    @staticmethod
    def _refused(instrument: str, ref: str | None, **context: int) -> None:
        logger.warning(
            "instrument_decrement_failed", instrument=instrument, ref=ref, **context
        )
