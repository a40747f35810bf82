"""Application service: Show Loyalty use case (query)."""

from __future__ import annotations

from calor.application.dto import LoyaltyDTO
from calor.domain.exceptions import ValidationError
from calor.domain.model.loyalty import LoyaltyAccount, normalize_customer_id
from calor.domain.model.value_objects import format_cents
from calor.domain.repository.loyalty_repository import LoyaltyAccountRepository
from calor.domain.service.instrument_validation import loyalty_account_or_empty


class ShowLoyaltyHandler:

    def __init__(self, loyalty_repo: LoyaltyAccountRepository) -> None:
        self._loyalty_repo = loyalty_repo

    def handle(self, customer_id: str) -> LoyaltyDTO:
        """A customer without an account simply has no points."""
        customer_id = normalize_customer_id(customer_id)
        if not customer_id:
            raise ValidationError("Customer ID is required")
        return loyalty_to_dto(loyalty_account_or_empty(self._loyalty_repo, customer_id))


def loyalty_to_dto(account: LoyaltyAccount) -> LoyaltyDTO:
    return LoyaltyDTO(
        customer_id=account.customer_id,
        points=account.points,
        redeemable=format_cents(account.redeemable_cents),
        lifetime_points=account.lifetime_points,
    )
