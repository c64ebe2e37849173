"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class UserRegistrationError(AccountsServiceError):
    """Raised when user registration fails."""
    pass


class MemberNotFoundError(AccountsServiceError):
    """Raised when a member does not exist or is inactive."""
    pass
