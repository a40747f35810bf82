"""Application service: Issue Gift Card use case."""

from __future__ import annotations

import secrets
from datetime import datetime

import structlog

from calor.application.dto import GiftCardDTO
from calor.application.check_gift_card import gift_card_to_dto
from calor.domain.exceptions import ValidationError
from calor.domain.model.gift_card import GiftCard
from calor.domain.repository.gift_card_repository import GiftCardRepository

logger = structlog.get_logger()

_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"


def generate_code() -> str:
    """Random code in the ``XXXX-XXXX-XXXX`` shape printed on cards."""
    groups = (
        "".join(secrets.choice(_CODE_ALPHABET) for _ in range(4)) for _ in range(3)
    )
    return "-".join(groups)


class IssueGiftCardHandler:

    def __init__(self, gift_card_repo: GiftCardRepository) -> None:
        self._gift_card_repo = gift_card_repo

    def handle(
        self,
        balance_cents: int,
        code: str | None = None,
        expires_at: datetime | None = None,
    ) -> GiftCardDTO:
        if balance_cents <= 0:
            raise ValidationError("Gift card balance must be greater than zero")

        if code is None:
            code = generate_code()
            while self._gift_card_repo.get_by_code(code) is not None:
                code = generate_code()
        elif self._gift_card_repo.get_by_code(code) is not None:
            raise ValidationError(f"Gift card '{code.strip().upper()}' already exists")

        card = GiftCard(code=code, balance_cents=balance_cents, expires_at=expires_at)
        self._gift_card_repo.save(card)
        logger.info("gift_card_issued", code=card.code, balance_cents=balance_cents)
        return gift_card_to_dto(card)
