"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  Settings are read on
every call so a changed environment takes effect immediately.
"""

from __future__ import annotations

from calor.domain.service.shipping_policy import ShippingPolicy
from calor.infrastructure.config import Settings
from calor.infrastructure.persistence.json_gift_card_repository import (
    JsonGiftCardRepository,
)
from calor.infrastructure.persistence.json_loyalty_repository import (
    JsonLoyaltyAccountRepository,
)
from calor.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from calor.infrastructure.persistence.json_promotion_repository import (
    JsonPromotionRepository,
)


def settings() -> Settings:
    return Settings.from_env()


def promotion_repository() -> JsonPromotionRepository:
    return JsonPromotionRepository(settings().data_dir / "promotions.json")


def gift_card_repository() -> JsonGiftCardRepository:
    return JsonGiftCardRepository(settings().data_dir / "gift_cards.json")


def loyalty_repository() -> JsonLoyaltyAccountRepository:
    return JsonLoyaltyAccountRepository(settings().data_dir / "loyalty_accounts.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(settings().data_dir / "orders.json")


def shipping_policy() -> ShippingPolicy:
    current = settings()
    return ShippingPolicy(
        free_threshold_cents=current.free_shipping_threshold_cents,
        flat_fee_cents=current.flat_shipping_cents,
    )
