"""Domain-specific exceptions for vehicle services."""


class VehiclesServiceError(Exception):
    """Base exception for vehicle services."""
    pass


class VehicleNotFoundError(VehiclesServiceError):
    """Raised when a vehicle does not exist or is not visible to the caller."""
    pass


class ExpenseNotFoundError(VehiclesServiceError):
    """Raised when an expense does not exist or is not visible to the caller."""
    pass


class DuplicateVinError(VehiclesServiceError):
    """Raised when a member already has a vehicle with this VIN."""
    pass


class VehicleAlreadySoldError(VehiclesServiceError):
    """Raised when expenses are changed on a sold vehicle."""
    pass


class InvalidAmountError(VehiclesServiceError):
    """Raised when a monetary amount is negative, zero where not allowed, or not finite."""
    pass
