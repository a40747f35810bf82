"""Application service: Award Points use case.

Manual credit of loyalty points (goodwill, promotions).  Points earned
from purchases are awarded by the order commit instead.
"""

from __future__ import annotations

import structlog

from calor.application.dto import LoyaltyDTO
from calor.application.show_loyalty import loyalty_to_dto
from calor.domain.exceptions import ValidationError
from calor.domain.model.loyalty import normalize_customer_id
from calor.domain.repository.loyalty_repository import LoyaltyAccountRepository
from calor.domain.service.instrument_validation import loyalty_account_or_empty

logger = structlog.get_logger()


class AwardPointsHandler:

    def __init__(self, loyalty_repo: LoyaltyAccountRepository) -> None:
        self._loyalty_repo = loyalty_repo

    def handle(self, customer_id: str, points: int) -> LoyaltyDTO:
        customer_id = normalize_customer_id(customer_id)
        if not customer_id:
            raise ValidationError("Customer ID is required")
        account = loyalty_account_or_empty(self._loyalty_repo, customer_id)
        account.award(points)
        self._loyalty_repo.save(account)
        logger.info(
            "points_awarded", customer_id=account.customer_id, points=points, balance=account.points
        )
        return loyalty_to_dto(account)
