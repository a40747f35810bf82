"""Abstract repository for GiftCard aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from calor.domain.model.gift_card import GiftCard


class GiftCardRepository(ABC):

    @abstractmethod
    def get_by_code(self, code: str) -> GiftCard | None:
        """Return a gift card by code (case-insensitive), or None."""

    @abstractmethod
    def save(self, card: GiftCard) -> None:
        """Persist a new or updated gift card."""

    @abstractmethod
    def debit(self, code: str, amount_cents: int) -> bool:
        """Atomically decrement the balance only if ``balance >= amount``.

        Returns False (and changes nothing) otherwise.
        """

    @abstractmethod
    def credit(self, code: str, amount_cents: int) -> None:
        """Give back a previous debit."""
