"""Application service: List Promotions use case (query)."""

from __future__ import annotations

from calor.application.dto import PromotionDTO
from calor.domain.model.value_objects import format_cents
from calor.domain.repository.promotion_repository import PromotionRepository


class ListPromotionsHandler:

    def __init__(self, promo_repo: PromotionRepository) -> None:
        self._promo_repo = promo_repo

    def handle(self) -> list[PromotionDTO]:
        return [
            PromotionDTO(
                code=promo.code,
                name=promo.name,
                type=promo.type.value,
                value=promo.value,
                minimum_order=format_cents(promo.minimum_order_cents),
                uses=f"{promo.times_used}/{promo.usage_limit if promo.usage_limit is not None else 'unlimited'}",
                active=promo.is_active and not promo.is_exhausted,
            )
            for promo in sorted(self._promo_repo.list_all(), key=lambda p: p.code)
        ]
