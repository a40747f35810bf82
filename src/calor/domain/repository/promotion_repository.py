"""Abstract repository for PromoCode aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from calor.domain.model.promotion import PromoCode


class PromotionRepository(ABC):

    @abstractmethod
    def get_by_code(self, code: str) -> PromoCode | None:
        """Return a promo by code (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[PromoCode]:
        """Return every promo code."""

    @abstractmethod
    def save(self, promo: PromoCode) -> None:
        """Persist a new or updated promo code."""

    @abstractmethod
    def record_usage(self, code: str) -> bool:
        """Atomically increment ``times_used`` if still below the limit.

        Returns False (and changes nothing) when the code is unknown or
        its usage limit has already been reached.
        """

    @abstractmethod
    def release_usage(self, code: str) -> None:
        """Undo a previous ``record_usage``."""
