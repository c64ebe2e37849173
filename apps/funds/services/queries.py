"""Fund movement listing and statistics."""

from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db.models import Count, Q, QuerySet, Sum

from apps.accounts.models import User
from apps.funds.models import FundMovement, MovementStatus
from .exceptions import MovementNotFoundError

ZERO = Decimal('0.00')


def _visible_movements(actor: User) -> QuerySet:
    queryset = FundMovement.objects.select_related('member', 'created_by', 'reviewed_by')
    if actor.is_admin:
        return queryset
    return queryset.filter(member=actor)


def get_movement(*, movement_id: UUID, actor: User) -> FundMovement:
    try:
        return _visible_movements(actor).get(id=movement_id)
    except (FundMovement.DoesNotExist, ValidationError):
        raise MovementNotFoundError("Fund movement not found")


def list_movements(
    *,
    actor: User,
    status: Optional[str] = None,
    kind: Optional[str] = None,
    member_id: Optional[UUID] = None
) -> QuerySet:
    """
    List fund movements: members see their own, admins see all.

    Args:
        actor: Requesting user
        status: Optional status filter
        kind: Optional kind filter
        member_id: Admin-only filter on member
    """
    queryset = _visible_movements(actor)
    if member_id and actor.is_admin:
        queryset = queryset.filter(member_id=member_id)
    if status:
        queryset = queryset.filter(status=status)
    if kind:
        queryset = queryset.filter(kind=kind)
    return queryset.order_by('-created_at')


def get_movement_stats(*, actor: User) -> dict:
    """
    Count movements per status and total requested/approved amounts.

    Returns:
        Dictionary with total, pending, approved, rejected counts and
        total_amount_requested, total_amount_approved (Decimal)
    """
    stats = _visible_movements(actor).aggregate(
        total=Count('id'),
        pending=Count('id', filter=Q(status=MovementStatus.PENDING)),
        approved=Count('id', filter=Q(status=MovementStatus.APPROVED)),
        rejected=Count('id', filter=Q(status=MovementStatus.REJECTED)),
        total_amount_requested=Sum('amount'),
        total_amount_approved=Sum('amount', filter=Q(status=MovementStatus.APPROVED)),
    )
    stats['total_amount_requested'] = stats['total_amount_requested'] or ZERO
    stats['total_amount_approved'] = stats['total_amount_approved'] or ZERO
    return stats
