"""Member directory: profile edits and admin-side member management."""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Count, Q, QuerySet

from apps.accounts.models import User, UserRole
from apps.activity.services import record_activity_on_commit
from .member_lookup import get_member

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ('display_name', 'phone', 'date_of_birth')


def list_members(*, search: Optional[str] = None, include_inactive: bool = False) -> QuerySet:
    """
    Members ordered by newest first, annotated with vehicle counts.

    Args:
        search: Case-insensitive match on email, display name or phone
        include_inactive: Also return deactivated members
    """
    queryset = User.objects.filter(role=UserRole.MEMBER)
    if not include_inactive:
        queryset = queryset.filter(is_active=True)
    if search:
        queryset = queryset.filter(
            Q(email__icontains=search)
            | Q(display_name__icontains=search)
            | Q(phone__icontains=search)
        )
    return queryset.annotate(
        vehicle_count=Count('vehicles', distinct=True),
    ).order_by('-created_at')


def update_profile(*, user: User, **changes) -> User:
    """Update the editable profile fields of a user; unknown keys are ignored."""
    fields = [name for name in PROFILE_FIELDS if name in changes]
    for name in fields:
        setattr(user, name, changes[name])
    if fields:
        user.save(update_fields=fields)
    return user


@transaction.atomic
def deactivate_member(*, admin: User, member_id: UUID) -> User:
    """
    Deactivate a member so they can no longer sign in.

    The member's vehicles, settlements and ledger stay in place.

    Raises:
        MemberNotFoundError: If no active member has this ID
    """
    member = get_member(member_id=member_id, for_update=True)
    member.is_active = False
    member.save(update_fields=['is_active'])

    logger.info("Member %s deactivated by %s", member.id, admin.id)
    record_activity_on_commit(
        actor=admin,
        activity_type='member_deactivated',
        resource_type='user',
        resource_id=member.id,
        metadata={'email': member.email},
    )
    return member
