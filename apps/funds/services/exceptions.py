"""Domain-specific exceptions for fund ledger services."""


class FundsServiceError(Exception):
    """Base exception for fund services."""
    pass


class MovementNotFoundError(FundsServiceError):
    """Raised when a fund movement does not exist or is not visible to the caller."""
    pass


class InvalidAmountError(FundsServiceError):
    """Raised when an amount is not a positive finite number."""
    pass


class InsufficientBalanceError(FundsServiceError):
    """Raised when a withdrawal exceeds the available balance."""
    pass


class AlreadyReviewedError(FundsServiceError):
    """Raised when reviewing a movement that is no longer pending."""
    pass


class InvalidReviewError(FundsServiceError):
    """Raised for an unknown decision or a rejection without a reason."""
    pass


class InvalidMovementKindError(FundsServiceError):
    """Raised when an adjustment direction is neither deposit nor withdrawal."""
    pass
