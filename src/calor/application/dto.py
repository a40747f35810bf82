"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CheckoutItemSpec:
    """Input: one cart line as the storefront holds it."""

    product_id: str
    variant_id: str | None
    unit_price_cents: int
    quantity: int


@dataclass(frozen=True)
class CheckoutRequest:
    """Input: everything the customer attached to a checkout attempt."""

    items: list[CheckoutItemSpec]
    customer_id: str | None = None
    promo_code: str | None = None
    gift_card_code: str | None = None
    points_requested: int = 0


@dataclass(frozen=True)
class CheckoutSummaryDTO:
    """Output: the order summary shown beside the payment form."""

    subtotal: str
    shipping: str
    promo_discount: str
    gift_card_discount: str
    points_discount: str
    points_used: int
    total: str
    total_cents: int
    free_shipping: bool
    notices: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class OrderLineItemDTO:
    product_id: str
    variant_id: str | None
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a committed order as displayed to the user."""

    id: int
    customer_id: str
    items: list[OrderLineItemDTO]
    subtotal: str
    shipping: str
    promo_code: str | None
    promo_discount: str
    gift_card_code: str | None
    gift_card_discount: str
    points_used: int
    points_discount: str
    total: str
    points_earned: int
    created_at: str


@dataclass(frozen=True)
class PromotionDTO:
    code: str
    name: str
    type: str
    value: int
    minimum_order: str
    uses: str  # "3/10" or "3/unlimited"
    active: bool


@dataclass(frozen=True)
class GiftCardDTO:
    code: str
    balance: str
    balance_cents: int
    expires_at: str | None


@dataclass(frozen=True)
class LoyaltyDTO:
    customer_id: str
    points: int
    redeemable: str
    lifetime_points: int
