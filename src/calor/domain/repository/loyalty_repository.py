"""Abstract repository for LoyaltyAccount aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from calor.domain.model.loyalty import LoyaltyAccount


class LoyaltyAccountRepository(ABC):

    @abstractmethod
    def get_by_customer_id(self, customer_id: str) -> LoyaltyAccount | None:
        """Return the customer's loyalty account, or None."""

    @abstractmethod
    def save(self, account: LoyaltyAccount) -> None:
        """Persist a new or updated loyalty account."""

    @abstractmethod
    def redeem(self, customer_id: str, points: int) -> bool:
        """Atomically deduct points only if ``points_balance >= points``.

        Returns False (and changes nothing) otherwise.
        """

    @abstractmethod
    def refund(self, customer_id: str, points: int) -> None:
        """Give back points from a previous ``redeem``."""
