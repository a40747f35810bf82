"""Application service: Place Order use case.

The authoritative side of checkout.  Steps:

1. Re-price the request with freshly loaded instruments (never values
   cached by the client).  Points are *not* clamped here; asking for
   more than the balance is an error.
2. Compare the recomputed total with the total the client is about to
   charge.  Any difference aborts before anything is mutated.
3. Apply the conditional balance decrements (promo use, gift card,
   points), rolling back on refusal.
4. Persist the order, handing the instruments back if that fails, and
   award loyalty points for the amount charged.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime

import structlog

from calor.application.checkout_pricing import CheckoutPricer
from calor.application.dto import CheckoutRequest, OrderDTO
from calor.application.show_order import order_to_dto
from calor.domain.exceptions import TotalMismatchError, ValidationError
from calor.domain.model.loyalty import normalize_customer_id, points_earned_for
from calor.domain.model.order import Order
from calor.domain.model.promotion import normalize_code
from calor.domain.repository.gift_card_repository import GiftCardRepository
from calor.domain.repository.loyalty_repository import LoyaltyAccountRepository
from calor.domain.repository.order_repository import OrderRepository
from calor.domain.repository.promotion_repository import PromotionRepository
from calor.domain.service.instrument_redemption_service import (
    InstrumentRedemptionService,
)
from calor.domain.service.instrument_validation import loyalty_account_or_empty
from calor.domain.service.shipping_policy import ShippingPolicy

logger = structlog.get_logger()


class PlaceOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        promo_repo: PromotionRepository,
        gift_card_repo: GiftCardRepository,
        loyalty_repo: LoyaltyAccountRepository,
        shipping_policy: ShippingPolicy,
    ) -> None:
        self._order_repo = order_repo
        self._loyalty_repo = loyalty_repo
        self._pricer = CheckoutPricer(
            promo_repo, gift_card_repo, loyalty_repo, shipping_policy
        )
        self._redemption = InstrumentRedemptionService(
            promo_repo, gift_card_repo, loyalty_repo
        )

    def handle(
        self,
        request: CheckoutRequest,
        expected_total_cents: int,
        now: datetime | None = None,
    ) -> OrderDTO:
        customer_id = normalize_customer_id(request.customer_id)
        if not customer_id:
            raise ValidationError("Customer ID is required to place an order")
        request = replace(request, customer_id=customer_id)

        priced = self._pricer.price(request, clamp_points=False, now=now)
        composition = priced.composition

        if composition.grand_total_cents != expected_total_cents:
            logger.warning(
                "total_mismatch",
                customer_id=customer_id,
                expected_cents=expected_total_cents,
                actual_cents=composition.grand_total_cents,
            )
            raise TotalMismatchError(
                expected_cents=expected_total_cents,
                actual_cents=composition.grand_total_cents,
            )

        earned = points_earned_for(composition.grand_total_cents)
        order = Order.create(
            customer_id=customer_id,
            items=priced.cart.items,
            composition=composition,
            promo_code=normalize_code(request.promo_code) if request.promo_code else None,
            gift_card_code=(
                normalize_code(request.gift_card_code) if request.gift_card_code else None
            ),
            points_earned=earned,
        )

        instruments = dict(
            promo_code=order.promo_code,
            gift_card_code=order.gift_card_code,
            customer_id=customer_id,
        )
        self._redemption.redeem(composition, **instruments)
        try:
            self._order_repo.save(order)
        except Exception:
            self._redemption.release(composition, **instruments)
            raise

        if earned > 0:
            account = loyalty_account_or_empty(self._loyalty_repo, customer_id)
            account.award(earned)
            self._loyalty_repo.save(account)

        logger.info(
            "order_placed",
            order_id=order.id,
            customer_id=order.customer_id,
            total_cents=order.total_cents,
            discount_cents=order.discount_cents,
            points_used=order.points_used,
            points_earned=earned,
        )
        return order_to_dto(order)
