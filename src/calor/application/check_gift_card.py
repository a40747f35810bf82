"""Application service: Check Gift Card use case (query).

Same validation the checkout applies, so a card that checks out fine
here can be attached to a checkout.
"""

from __future__ import annotations

from datetime import datetime

from calor.application.dto import GiftCardDTO
from calor.domain.model.gift_card import GiftCard
from calor.domain.model.value_objects import format_cents
from calor.domain.repository.gift_card_repository import GiftCardRepository
from calor.domain.service.instrument_validation import GiftCardValidator


class CheckGiftCardHandler:

    def __init__(self, gift_card_repo: GiftCardRepository) -> None:
        self._validator = GiftCardValidator(gift_card_repo)

    def handle(self, code: str, now: datetime | None = None) -> GiftCardDTO:
        return gift_card_to_dto(self._validator.load(code, now))


def gift_card_to_dto(card: GiftCard) -> GiftCardDTO:
    return GiftCardDTO(
        code=card.code,
        balance=format_cents(card.balance_cents),
        balance_cents=card.balance_cents,
        expires_at=card.expires_at.strftime("%Y-%m-%d") if card.expires_at else None,
    )
