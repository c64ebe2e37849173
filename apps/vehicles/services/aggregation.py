from decimal import Decimal
from uuid import UUID

from django.db.models import Sum

from apps.vehicles.models import AdditionalExpense

ZERO = Decimal('0.00')


def get_vehicle_expenses_total(*, vehicle_id: UUID) -> Decimal:
    """Sum of additional expenses recorded for a vehicle; 0.00 when there are none."""
    total = AdditionalExpense.objects.filter(
        vehicle_id=vehicle_id
    ).aggregate(total=Sum('amount'))['total']
    return total if total is not None else ZERO
