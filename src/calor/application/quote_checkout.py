"""Application service: Quote Checkout use case (query).

Renders the live order summary for the checkout page.  The figure it
returns is a preview only and is never trusted for money movement; the
order commit recomputes it from scratch.

Unlike the commit, a points request above the customer's balance is
clamped to the balance here, with a notice, so the customer sees what
they can actually redeem.
"""

from __future__ import annotations

from datetime import datetime

import structlog

from calor.application.checkout_pricing import CheckoutPricer
from calor.application.dto import CheckoutRequest, CheckoutSummaryDTO
from calor.domain.model.discount import DiscountComposition
from calor.domain.model.value_objects import format_cents
from calor.domain.repository.gift_card_repository import GiftCardRepository
from calor.domain.repository.loyalty_repository import LoyaltyAccountRepository
from calor.domain.repository.promotion_repository import PromotionRepository
from calor.domain.service.shipping_policy import ShippingPolicy

logger = structlog.get_logger()


class QuoteCheckoutHandler:

    def __init__(
        self,
        promo_repo: PromotionRepository,
        gift_card_repo: GiftCardRepository,
        loyalty_repo: LoyaltyAccountRepository,
        shipping_policy: ShippingPolicy,
    ) -> None:
        self._pricer = CheckoutPricer(
            promo_repo, gift_card_repo, loyalty_repo, shipping_policy
        )

    def handle(
        self, request: CheckoutRequest, now: datetime | None = None
    ) -> CheckoutSummaryDTO:
        priced = self._pricer.price(request, clamp_points=True, now=now)
        composition = priced.composition

        notices: list[str] = []
        if priced.points_requested < request.points_requested:
            notices.append(
                f"Only {priced.points_available} points available; "
                f"requested {request.points_requested}"
            )
        if 0 < composition.points_consumed < priced.points_requested:
            notices.append(
                f"Using {composition.points_consumed} of {priced.points_requested} "
                f"points (whole dollars only)"
            )

        logger.info(
            "checkout_quoted",
            customer_id=request.customer_id,
            subtotal_cents=composition.subtotal_cents,
            total_cents=composition.grand_total_cents,
            points_clamped=priced.points_requested < request.points_requested,
        )
        return self._to_dto(composition, notices)

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_dto(
        composition: DiscountComposition, notices: list[str]
    ) -> CheckoutSummaryDTO:
        return CheckoutSummaryDTO(
            subtotal=format_cents(composition.subtotal_cents),
            shipping=format_cents(composition.shipping_cents),
            promo_discount=format_cents(composition.promo_discount_cents),
            gift_card_discount=format_cents(composition.gift_card_discount_cents),
            points_discount=format_cents(composition.points_discount_cents),
            points_used=composition.points_consumed,
            total=format_cents(composition.grand_total_cents),
            total_cents=composition.grand_total_cents,
            free_shipping=composition.free_shipping,
            notices=notices,
        )
