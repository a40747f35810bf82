"""JSON-file-backed implementation of GiftCardRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from calor.domain.model.gift_card import GiftCard
from calor.domain.model.promotion import normalize_code
from calor.domain.repository.gift_card_repository import GiftCardRepository
from calor.infrastructure.persistence.json_records import JsonRecordFile


class JsonGiftCardRepository(GiftCardRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonRecordFile(file_path)

    def get_by_code(self, code: str) -> GiftCard | None:
        raw = self._file.find("code", normalize_code(code))
        return self._to_domain(raw) if raw is not None else None

    def save(self, card: GiftCard) -> None:
        self._file.upsert("code", self._to_raw(card))

    def debit(self, code: str, amount_cents: int) -> bool:
        def apply(raw: dict) -> dict | None:
            card = self._to_domain(raw)
            if amount_cents <= 0 or card.balance_cents < amount_cents:
                return None
            card.debit(amount_cents)
            return self._to_raw(card)

        return self._file.modify("code", normalize_code(code), apply)

    def credit(self, code: str, amount_cents: int) -> None:
        def apply(raw: dict) -> dict:
            card = self._to_domain(raw)
            card.credit(amount_cents)
            return self._to_raw(card)

        self._file.modify("code", normalize_code(code), apply)

    @staticmethod
    def _to_raw(card: GiftCard) -> dict:
        return {
            "code": card.code,
            "balance_cents": card.balance_cents,
            "initial_balance_cents": card.initial_balance_cents,
            "expires_at": card.expires_at.isoformat() if card.expires_at else None,
        }

    @staticmethod
    def _to_domain(raw: dict) -> GiftCard:
        expires_at = raw.get("expires_at")
        return GiftCard(
            code=raw["code"],
            balance_cents=raw["balance_cents"],
            initial_balance_cents=raw.get("initial_balance_cents"),
            expires_at=datetime.fromisoformat(expires_at) if expires_at else None,
        )
