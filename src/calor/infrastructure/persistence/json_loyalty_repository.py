"""JSON-file-backed implementation of LoyaltyAccountRepository."""

from __future__ import annotations

from pathlib import Path

from calor.domain.model.loyalty import LoyaltyAccount
from calor.domain.repository.loyalty_repository import LoyaltyAccountRepository
from calor.infrastructure.persistence.json_records import JsonRecordFile


class JsonLoyaltyAccountRepository(LoyaltyAccountRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonRecordFile(file_path)

    def get_by_customer_id(self, customer_id: str) -> LoyaltyAccount | None:
        raw = self._file.find("customer_id", customer_id)
        return self._to_domain(raw) if raw is not None else None

    def save(self, account: LoyaltyAccount) -> None:
        self._file.upsert("customer_id", self._to_raw(account))

    def redeem(self, customer_id: str, points: int) -> bool:
        def apply(raw: dict) -> dict | None:
            account = self._to_domain(raw)
            if points <= 0 or account.points < points:
                return None
            account.redeem(points)
            return self._to_raw(account)

        return self._file.modify("customer_id", customer_id, apply)

    def refund(self, customer_id: str, points: int) -> None:
        def apply(raw: dict) -> dict:
            account = self._to_domain(raw)
            account.refund(points)
            return self._to_raw(account)

        self._file.modify("customer_id", customer_id, apply)

    @staticmethod
    def _to_raw(account: LoyaltyAccount) -> dict:
        return {
            "customer_id": account.customer_id,
            "points": account.points,
            "lifetime_points": account.lifetime_points,
        }

    @staticmethod
    def _to_domain(raw: dict) -> LoyaltyAccount:
        return LoyaltyAccount(
            customer_id=raw["customer_id"],
            points=raw["points"],
            lifetime_points=raw.get("lifetime_points", 0),
        )
