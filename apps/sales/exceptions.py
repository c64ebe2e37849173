"""
Sales exceptions.

Kept at app level so the models module can raise them without importing
the services package.
"""


class SalesServiceError(Exception):
    """Base exception for sales services."""
    pass


class AlreadySettledError(SalesServiceError):
    """Raised when a vehicle has already been sold and settled."""
    pass


class SettlementNotFoundError(SalesServiceError):
    """Raised when a settlement does not exist or is not visible to the caller."""
    pass


class InvalidAmountError(SalesServiceError):
    """Raised when a settlement input is negative or not finite."""
    pass


class ImmutableSettlementError(SalesServiceError):
    """Raised on any attempt to change or delete a recorded settlement."""
    pass
