"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserRegistrationError,
    MemberNotFoundError,
)
from .user_registration import register_user
from .member_lookup import get_member
from .member_directory import list_members, update_profile, deactivate_member

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserRegistrationError',
    'MemberNotFoundError',
    # Services
    'register_user',
    'get_member',
    'list_members',
    'update_profile',
    'deactivate_member',
]
