"""Application service: Add Promotion use case."""

from __future__ import annotations

from datetime import datetime

import structlog

from calor.domain.exceptions import ValidationError
from calor.domain.model.promotion import PromoCode, PromoType
from calor.domain.repository.promotion_repository import PromotionRepository

logger = structlog.get_logger()


class AddPromotionHandler:

    def __init__(self, promo_repo: PromotionRepository) -> None:
        self._promo_repo = promo_repo

    def handle(
        self,
        code: str,
        promo_type: str,
        value: int,
        name: str = "",
        minimum_order_cents: int = 0,
        usage_limit: int | None = None,
        max_discount_cents: int | None = None,
        starts_at: datetime | None = None,
        ends_at: datetime | None = None,
    ) -> PromoCode:
        """Create a promo code; codes are unique regardless of case."""
        try:
            kind = PromoType(promo_type)
        except ValueError as exc:
            allowed = ", ".join(t.value for t in PromoType)
            raise ValidationError(
                f"Unknown promo type '{promo_type}' (expected one of: {allowed})"
            ) from exc

        if self._promo_repo.get_by_code(code) is not None:
            raise ValidationError(f"Promo code '{code.strip().upper()}' already exists")

        if starts_at is not None and ends_at is not None and ends_at <= starts_at:
            raise ValidationError("Promo must end after it starts")

        promo = PromoCode(
            code=code,
            type=kind,
            value=value,
            name=name.strip(),
            minimum_order_cents=minimum_order_cents,
            usage_limit=usage_limit,
            max_discount_cents=max_discount_cents,
            starts_at=starts_at,
            ends_at=ends_at,
        )
        self._promo_repo.save(promo)
        logger.info("promotion_added", code=promo.code, type=kind.value, value=value)
        return promo
