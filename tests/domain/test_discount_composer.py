"""Unit tests for the discount composer."""

import itertools

import pytest

from calor.domain.exceptions import (
    GiftCardEmptyError,
    InsufficientPointsError,
    PromoNotEligibleError,
    ValidationError,
)
from calor.domain.model.discount import AppliedGiftCard, AppliedPromo
from calor.domain.model.promotion import PromoType
from calor.domain.service.discount_composer import compose


def _pct(value, **kwargs):
    return AppliedPromo(PromoType.PERCENTAGE, value, **kwargs)


# ── Worked examples ──────────────────────────────────────────────────────────


class TestWorkedExamples:

    def test_all_three_instruments(self):
        result = compose(
            subtotal_cents=5000,
            shipping_cents=1200,
            promo=_pct(10),
            gift_card=AppliedGiftCard(2000),
            points_requested=2000,
            points_available=2000,
        )
        assert result.promo_discount_cents == 500
        assert result.gift_card_discount_cents == 2000
        assert result.points_discount_cents == 2000
        assert result.points_consumed == 2000
        assert result.grand_total_cents == 1700

    def test_free_shipping_only_touches_shipping(self):
        result = compose(4000, 1200, promo=AppliedPromo(PromoType.FREE_SHIPPING, 0))
        assert result.promo_discount_cents == 1200
        assert result.shipping_charged_cents == 0
        assert result.grand_total_cents == 4000

    def test_gift_card_clamped_to_its_balance(self):
        result = compose(10000, 0, gift_card=AppliedGiftCard(500))
        assert result.gift_card_discount_cents == 500
        assert result.grand_total_cents == 9500

    def test_no_instruments(self):
        result = compose(5000, 1200)
        assert result.total_discount_cents == 0
        assert result.grand_total_cents == 6200
        assert result.shipping_charged_cents == 1200


# ── Promo application ────────────────────────────────────────────────────────


class TestPromo:

    def test_percentage_rounds_down(self):
        result = compose(999, 0, promo=_pct(15))
        # 999 * 15 / 100 = 149.85
        assert result.promo_discount_cents == 149

    def test_percentage_respects_max_discount(self):
        result = compose(10000, 0, promo=_pct(50, max_discount_cents=2000))
        assert result.promo_discount_cents == 2000
        assert result.grand_total_cents == 8000

    def test_percentage_applies_to_subtotal_not_shipping(self):
        result = compose(5000, 1200, promo=_pct(100))
        assert result.promo_discount_cents == 5000
        assert result.grand_total_cents == 1200

    def test_fixed_amount_capped_at_subtotal(self):
        result = compose(5000, 1200, promo=AppliedPromo(PromoType.FIXED_AMOUNT, 8000))
        assert result.promo_discount_cents == 5000
        assert result.grand_total_cents == 1200

    def test_free_shipping_when_shipping_already_free(self):
        result = compose(8000, 0, promo=AppliedPromo(PromoType.FREE_SHIPPING, 0))
        assert result.promo_discount_cents == 0
        assert result.grand_total_cents == 8000

    def test_below_minimum_order_rejected(self):
        promo = _pct(10, minimum_order_cents=5000)
        with pytest.raises(PromoNotEligibleError, match=r"\$50.00") as exc_info:
            compose(4999, 1200, promo=promo)
        assert exc_info.value.minimum_order_cents == 5000

    def test_exactly_minimum_order_accepted(self):
        result = compose(5000, 0, promo=_pct(10, minimum_order_cents=5000))
        assert result.promo_discount_cents == 500


# ── Gift card and points ─────────────────────────────────────────────────────


class TestGiftCardAndPoints:

    def test_empty_gift_card_rejected(self):
        with pytest.raises(GiftCardEmptyError):
            compose(5000, 0, gift_card=AppliedGiftCard(0))

    def test_gift_card_after_promo_uses_remaining_only(self):
        result = compose(
            2000, 0,
            promo=AppliedPromo(PromoType.FIXED_AMOUNT, 1500),
            gift_card=AppliedGiftCard(5000),
        )
        assert result.gift_card_discount_cents == 500
        assert result.grand_total_cents == 0

    def test_points_above_available_rejected(self):
        with pytest.raises(InsufficientPointsError) as exc_info:
            compose(5000, 0, points_requested=600, points_available=500)
        assert exc_info.value.requested == 600
        assert exc_info.value.available == 500

    def test_partial_unit_of_points_clamped_down(self):
        result = compose(10000, 0, points_requested=2550, points_available=3000)
        assert result.points_consumed == 2500
        assert result.points_discount_cents == 2500

    def test_points_below_one_unit_redeem_nothing(self):
        result = compose(10000, 0, points_requested=99, points_available=99)
        assert result.points_consumed == 0
        assert result.grand_total_cents == 10000

    def test_points_never_cover_a_partial_dollar(self):
        result = compose(1050, 0, points_requested=5000, points_available=5000)
        assert result.points_discount_cents == 1000
        assert result.points_consumed == 1000
        assert result.grand_total_cents == 50


# ── Ordering ─────────────────────────────────────────────────────────────────


class TestApplicationOrder:

    def test_gift_card_applied_before_points(self):
        result = compose(
            6000, 0,
            gift_card=AppliedGiftCard(5000),
            points_requested=5000,
            points_available=5000,
        )
        assert result.gift_card_discount_cents == 5000
        assert result.points_consumed == 1000
        assert result.grand_total_cents == 0

        # Redeeming points first would leave only $10 for the gift card
        points_first = compose(6000, 0, points_requested=5000, points_available=5000)
        gift_after_points = min(5000, points_first.grand_total_cents)
        assert gift_after_points != result.gift_card_discount_cents

    def test_promo_applied_before_gift_card(self):
        result = compose(
            10000, 0,
            promo=_pct(20),
            gift_card=AppliedGiftCard(9000),
        )
        assert result.promo_discount_cents == 2000
        assert result.gift_card_discount_cents == 8000

        # A percentage taken after store credit would be computed on less
        gift_first = compose(10000, 0, gift_card=AppliedGiftCard(9000))
        assert gift_first.grand_total_cents * 20 // 100 != result.promo_discount_cents


# ── Input validation ─────────────────────────────────────────────────────────


class TestInputValidation:

    @pytest.mark.parametrize("field", [
        "subtotal_cents", "shipping_cents", "points_requested", "points_available",
    ])
    def test_negative_amount_rejected(self, field):
        kwargs = dict(
            subtotal_cents=1000, shipping_cents=0, points_requested=0, points_available=0
        )
        kwargs[field] = -1
        with pytest.raises(ValidationError, match="cannot be negative"):
            compose(**kwargs)

    def test_percentage_above_100_rejected(self):
        with pytest.raises(ValidationError):
            _pct(101)

    def test_negative_gift_card_balance_rejected(self):
        with pytest.raises(ValidationError):
            AppliedGiftCard(-5)


# ── Properties over an adversarial grid ──────────────────────────────────────


_PROMOS = [
    None,
    _pct(10),
    _pct(100, max_discount_cents=700),
    AppliedPromo(PromoType.FIXED_AMOUNT, 3000),
    AppliedPromo(PromoType.FREE_SHIPPING, 0),
]
_GRID = list(itertools.product(
    [0, 99, 1050, 5000, 7499, 20000],   # subtotal
    [0, 1200],                           # shipping
    range(len(_PROMOS)),                 # promo index
    [None, 1, 2500, 100000],             # gift card balance
    [0, 99, 150, 5000],                  # points requested
))


@pytest.mark.parametrize("subtotal,shipping,promo_idx,balance,points", _GRID)
def test_composition_invariants(subtotal, shipping, promo_idx, balance, points):
    promo = _PROMOS[promo_idx]
    gift_card = AppliedGiftCard(balance) if balance is not None else None
    available = points + 50

    result = compose(subtotal, shipping, promo, gift_card, points, available)

    pre_discount = subtotal + shipping
    assert result.grand_total_cents >= 0
    assert result.total_discount_cents <= pre_discount
    assert result.grand_total_cents == pre_discount - result.total_discount_cents
    if gift_card is not None:
        assert result.gift_card_discount_cents <= balance
    assert result.points_consumed <= available
    assert result.points_consumed <= points
    assert result.points_consumed % 100 == 0
    assert result.points_discount_cents == result.points_consumed

    # Pure: same inputs, same output
    assert compose(subtotal, shipping, promo, gift_card, points, available) == result
