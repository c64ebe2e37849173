"""
Activity recording service.

Audit entries are written on a best-effort basis: any failure is logged
and swallowed, so a broken audit trail can never fail or roll back the
financial operation that triggered it.
"""

import logging
from typing import Optional

from django.db import transaction

from apps.accounts.models import User
from .models import ActivityLog

logger = logging.getLogger(__name__)


def record_activity(
    *,
    actor: Optional[User],
    activity_type: str,
    resource_type: str,
    resource_id='',
    metadata: Optional[dict] = None
) -> Optional[ActivityLog]:
    """
    Persist an activity entry, never raising.

    Args:
        actor: User who performed the action (None for system actions)
        activity_type: Short machine name, e.g. 'vehicle_sold'
        resource_type: Kind of resource affected, e.g. 'vehicle'
        resource_id: Identifier of the affected resource
        metadata: JSON-serializable details (Decimal, date and UUID allowed)

    Returns:
        The created ActivityLog, or None if recording failed
    """
    try:
        # Own savepoint so a failed insert leaves any outer transaction usable
        with transaction.atomic():
            return ActivityLog.objects.create(
                actor=actor,
                activity_type=activity_type,
                resource_type=resource_type,
                resource_id=str(resource_id),
                metadata=metadata or {},
            )
    except Exception:
        logger.exception(
            "Failed to record activity %s for %s:%s",
            activity_type, resource_type, resource_id,
        )
        return None


def record_activity_on_commit(**kwargs) -> None:
    """
    Schedule record_activity to run after the current transaction commits.

    Outside a transaction the entry is recorded immediately.
    """
    transaction.on_commit(lambda: record_activity(**kwargs))
