"""JSON-file-backed implementation of PromotionRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from calor.domain.model.promotion import PromoCode, PromoType, normalize_code
from calor.domain.repository.promotion_repository import PromotionRepository
from calor.infrastructure.persistence.json_records import JsonRecordFile


class JsonPromotionRepository(PromotionRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonRecordFile(file_path)

    def get_by_code(self, code: str) -> PromoCode | None:
        raw = self._file.find("code", normalize_code(code))
        return self._to_domain(raw) if raw is not None else None

    def list_all(self) -> list[PromoCode]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, promo: PromoCode) -> None:
        self._file.upsert("code", self._to_raw(promo))

    def record_usage(self, code: str) -> bool:
        def apply(raw: dict) -> dict | None:
            promo = self._to_domain(raw)
            if promo.is_exhausted:
                return None
            promo.record_usage()
            return self._to_raw(promo)

        return self._file.modify("code", normalize_code(code), apply)

    def release_usage(self, code: str) -> None:
        def apply(raw: dict) -> dict | None:
            promo = self._to_domain(raw)
            if promo.times_used == 0:
                return None
            promo.release_usage()
            return self._to_raw(promo)

        self._file.modify("code", normalize_code(code), apply)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(promo: PromoCode) -> dict:
        return {
            "code": promo.code,
            "name": promo.name,
            "type": promo.type.value,
            "value": promo.value,
            "minimum_order_cents": promo.minimum_order_cents,
            "usage_limit": promo.usage_limit,
            "times_used": promo.times_used,
            "max_discount_cents": promo.max_discount_cents,
            "is_active": promo.is_active,
            "starts_at": _format_dt(promo.starts_at),
            "ends_at": _format_dt(promo.ends_at),
        }

    @staticmethod
    def _to_domain(raw: dict) -> PromoCode:
        return PromoCode(
            code=raw["code"],
            type=PromoType(raw["type"]),
            value=raw["value"],
            name=raw.get("name", ""),
            minimum_order_cents=raw.get("minimum_order_cents", 0),
            usage_limit=raw.get("usage_limit"),
            times_used=raw.get("times_used", 0),
            max_discount_cents=raw.get("max_discount_cents"),
            is_active=raw.get("is_active", True),
            starts_at=_parse_dt(raw.get("starts_at")),
            ends_at=_parse_dt(raw.get("ends_at")),
        )


def _format_dt(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _parse_dt(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None
