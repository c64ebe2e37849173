"""Domain-specific exceptions for policy services."""


class PoliciesServiceError(Exception):
    """Base exception for policy services."""
    pass


class SettingNotFoundError(PoliciesServiceError):
    """Raised when a setting key does not exist."""
    pass


class InvalidSettingValueError(PoliciesServiceError):
    """Raised when a setting value fails validation."""
    pass


class PolicyUnavailableError(PoliciesServiceError):
    """Raised when the franchise fee policy is missing or unreadable."""
    pass
