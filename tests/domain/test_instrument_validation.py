"""Unit tests for promo and gift card validation."""

from datetime import datetime, timedelta, timezone

import pytest

from calor.domain.exceptions import (
    GiftCardEmptyError,
    GiftCardInvalidError,
    PromoInvalidError,
    PromoNotEligibleError,
)
from calor.domain.model.gift_card import GiftCard
from calor.domain.model.loyalty import LoyaltyAccount
from calor.domain.model.promotion import PromoCode, PromoType
from calor.domain.service.instrument_validation import (
    GiftCardValidator,
    PromoValidator,
    points_available,
)
from tests.fakes import (
    FakeGiftCardRepository,
    FakeLoyaltyAccountRepository,
    FakePromotionRepository,
)

NOW = datetime(2026, 3, 1, tzinfo=timezone.utc)


class TestPromoValidator:

    def _validator(self, *promos):
        return PromoValidator(FakePromotionRepository(list(promos)))

    def test_lookup_is_case_insensitive(self):
        validator = self._validator(
            PromoCode("WELCOME15", PromoType.PERCENTAGE, 15, max_discount_cents=3000)
        )
        applied = validator.validate("welcome15", subtotal_cents=5000, now=NOW)
        assert applied.type == PromoType.PERCENTAGE
        assert applied.value == 15
        assert applied.max_discount_cents == 3000

    def test_unknown_code_invalid(self):
        with pytest.raises(PromoInvalidError, match="Invalid promo code"):
            self._validator().validate("NOPE", 5000, now=NOW)

    def test_blank_code_invalid(self):
        with pytest.raises(PromoInvalidError, match="required"):
            self._validator().validate("", 5000, now=NOW)

    def test_expired_code_invalid(self):
        validator = self._validator(
            PromoCode("OLD", PromoType.FIXED_AMOUNT, 500, ends_at=NOW - timedelta(days=1))
        )
        with pytest.raises(PromoInvalidError, match="expired"):
            validator.validate("OLD", 5000, now=NOW)

    def test_exhausted_code_invalid(self):
        validator = self._validator(
            PromoCode("ONCE", PromoType.FIXED_AMOUNT, 500, usage_limit=1, times_used=1)
        )
        with pytest.raises(PromoInvalidError, match="usage limit"):
            validator.validate("ONCE", 5000, now=NOW)

    def test_minimum_spend_not_eligible(self):
        validator = self._validator(
            PromoCode("BIG", PromoType.FIXED_AMOUNT, 1000, minimum_order_cents=10000)
        )
        with pytest.raises(PromoNotEligibleError):
            validator.validate("BIG", 9999, now=NOW)


class TestGiftCardValidator:

    def _validator(self, *cards):
        return GiftCardValidator(FakeGiftCardRepository(list(cards)))

    def test_valid_card_snapshot(self):
        applied = self._validator(GiftCard("G-1", 2500)).validate("g-1", now=NOW)
        assert applied.available_balance_cents == 2500

    def test_unknown_card_invalid(self):
        with pytest.raises(GiftCardInvalidError, match="Invalid gift card"):
            self._validator().validate("G-404", now=NOW)

    def test_expired_card_invalid(self):
        card = GiftCard("G-1", 2500, expires_at=NOW - timedelta(minutes=1))
        with pytest.raises(GiftCardInvalidError, match="expired"):
            self._validator(card).validate("G-1", now=NOW)

    def test_zero_balance_card_empty(self):
        with pytest.raises(GiftCardEmptyError):
            self._validator(GiftCard("G-1", 0)).validate("G-1", now=NOW)


class TestPointsAvailable:

    def test_existing_account(self):
        repo = FakeLoyaltyAccountRepository([LoyaltyAccount("cust-1", points=750)])
        assert points_available(repo, "cust-1") == 750

    def test_missing_account_or_guest_has_none(self):
        repo = FakeLoyaltyAccountRepository()
        assert points_available(repo, "cust-2") == 0
        assert points_available(repo, None) == 0
