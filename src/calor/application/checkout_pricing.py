"""Shared pricing step for the checkout quote and the order commit.

Loads every attached instrument fresh from its repository, builds the
cart and runs the discount composer.  Both callers must go through this
one path so the preview and the commit cannot drift apart.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from calor.application.dto import CheckoutItemSpec, CheckoutRequest
from calor.domain.exceptions import ValidationError
from calor.domain.model.cart import Cart, CartLineItem
from calor.domain.model.discount import DiscountComposition
from calor.domain.model.loyalty import normalize_customer_id
from calor.domain.model.value_objects import Quantity
from calor.domain.repository.gift_card_repository import GiftCardRepository
from calor.domain.repository.loyalty_repository import LoyaltyAccountRepository
from calor.domain.repository.promotion_repository import PromotionRepository
from calor.domain.service.discount_composer import compose
from calor.domain.service.instrument_validation import (
    GiftCardValidator,
    PromoValidator,
    points_available,
)
from calor.domain.service.shipping_policy import ShippingPolicy


@dataclass(frozen=True)
class PricedCheckout:
    cart: Cart
    composition: DiscountComposition
    points_available: int
    points_requested: int


class CheckoutPricer:

    def __init__(
        self,
        promo_repo: PromotionRepository,
        gift_card_repo: GiftCardRepository,
        loyalty_repo: LoyaltyAccountRepository,
        shipping_policy: ShippingPolicy,
    ) -> None:
        self._promo_validator = PromoValidator(promo_repo)
        self._gift_card_validator = GiftCardValidator(gift_card_repo)
        self._loyalty_repo = loyalty_repo
        self._shipping_policy = shipping_policy

    def price(
        self,
        request: CheckoutRequest,
        clamp_points: bool = False,
        now: datetime | None = None,
    ) -> PricedCheckout:
        """Price a checkout request.

        With ``clamp_points`` a request for more points than the customer
        holds is reduced to the balance instead of being rejected; only
        the untrusted preview does that.
        """
        cart = build_cart(request.items)
        if cart.is_empty:
            raise ValidationError("Order must contain at least one item")

        subtotal = cart.subtotal_cents
        shipping = self._shipping_policy.shipping_for(subtotal)

        promo = None
        if request.promo_code:
            promo = self._promo_validator.validate(request.promo_code, subtotal, now)

        gift_card = None
        if request.gift_card_code:
            gift_card = self._gift_card_validator.validate(request.gift_card_code, now)

        if request.points_requested < 0:
            raise ValidationError("Requested points cannot be negative")
        customer_id = normalize_customer_id(request.customer_id)
        available = points_available(self._loyalty_repo, customer_id)
        requested = request.points_requested
        if clamp_points:
            requested = min(requested, available)

        composition = compose(
            subtotal_cents=subtotal,
            shipping_cents=shipping,
            promo=promo,
            gift_card=gift_card,
            points_requested=requested,
            points_available=available,
        )
        return PricedCheckout(
            cart=cart,
            composition=composition,
            points_available=available,
            points_requested=requested,
        )


def build_cart(specs: list[CheckoutItemSpec]) -> Cart:
    return Cart(
        items=[
            CartLineItem(
                product_id=spec.product_id,
                variant_id=spec.variant_id,
                unit_price_cents=spec.unit_price_cents,
                quantity=Quantity(spec.quantity),
            )
            for spec in specs
        ]
    )
