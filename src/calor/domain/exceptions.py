"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.

Checkout instrument failures share ``CheckoutError``.  Every one of them is
recoverable at the checkout UI (the customer removes or replaces the
instrument) except ``TotalMismatchError``, which must hard-fail order
creation.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class CheckoutError(DomainException):
    """A discount instrument could not be applied to a checkout."""

    recoverable = True


class PromoInvalidError(CheckoutError):
    """Promo code unknown, inactive, expired or out of uses."""


class PromoNotEligibleError(CheckoutError):
    """Order subtotal is below the promo's minimum spend."""

    def __init__(self, message: str, minimum_order_cents: int) -> None:
        super().__init__(message)
        self.minimum_order_cents = minimum_order_cents


class GiftCardInvalidError(CheckoutError):
    """Gift card code unknown or expired."""


class GiftCardEmptyError(CheckoutError):
    """Gift card has no remaining balance."""


class InsufficientPointsError(CheckoutError):
    """More loyalty points requested than the account holds."""

    def __init__(self, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient points: requested {requested}, have {available}"
        )
        self.requested = requested
        self.available = available


class TotalMismatchError(CheckoutError):
    """Client-submitted total disagrees with the server recomputation."""

    recoverable = False

    def __init__(self, expected_cents: int, actual_cents: int) -> None:
        super().__init__(
            f"Order total mismatch: client submitted {expected_cents} cents, "
            f"server computed {actual_cents} cents"
        )
        self.expected_cents = expected_cents
        self.actual_cents = actual_cents
