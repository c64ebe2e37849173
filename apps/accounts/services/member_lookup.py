"""Member lookup shared by the vehicle, sales and funds services."""

from uuid import UUID

from django.core.exceptions import ValidationError

from apps.accounts.models import User, UserRole

from .exceptions import MemberNotFoundError


def get_member(*, member_id: UUID, for_update: bool = False) -> User:
    """
    Fetch an active member by ID.

    Args:
        member_id: UUID of the member
        for_update: Lock the member row (must be called inside a transaction)

    Returns:
        User instance with the member role

    Raises:
        MemberNotFoundError: If no active member has this ID
    """
    queryset = User.objects.filter(role=UserRole.MEMBER, is_active=True)
    if for_update:
        queryset = queryset.select_for_update()

    try:
        return queryset.get(id=member_id)
    except (User.DoesNotExist, ValidationError):
        raise MemberNotFoundError(f"Member with ID {member_id} not found")
