"""Additional expense services."""

import logging
from datetime import date
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.activity.services import record_activity_on_commit
from apps.vehicles.models import AdditionalExpense, Vehicle
from .exceptions import ExpenseNotFoundError, VehicleAlreadySoldError
from .validation import clean_amount
from .vehicle_management import get_vehicle

logger = logging.getLogger(__name__)


def _ensure_not_sold(vehicle: Vehicle) -> None:
    if vehicle.is_sold:
        raise VehicleAlreadySoldError("Expenses cannot be changed on a sold vehicle")


def _get_expense_for_update(*, expense_id: UUID, actor: User) -> AdditionalExpense:
    """Fetch an expense visible to the actor and lock its vehicle row."""
    queryset = AdditionalExpense.objects.all()
    if not actor.is_admin:
        queryset = queryset.filter(vehicle__member=actor)

    try:
        expense = queryset.get(id=expense_id)
    except (AdditionalExpense.DoesNotExist, ValidationError):
        raise ExpenseNotFoundError("Expense not found")

    # Same lock the sale recorder takes, so a concurrent sale cannot interleave
    expense.vehicle = Vehicle.objects.select_for_update().get(id=expense.vehicle_id)
    return expense


@transaction.atomic
def add_expense(
    *,
    actor: User,
    vehicle_id: UUID,
    amount,
    description: str,
    expense_date: Optional[date] = None
) -> AdditionalExpense:
    """
    Record an additional expense against a vehicle.

    Raises:
        VehicleNotFoundError: If the vehicle is not visible to the actor
        VehicleAlreadySoldError: If the vehicle has been sold
        InvalidAmountError: If amount is not a positive finite number
    """
    amount = clean_amount(amount)
    vehicle = get_vehicle(vehicle_id=vehicle_id, actor=actor, for_update=True)
    _ensure_not_sold(vehicle)

    fields = {
        'vehicle': vehicle,
        'member_id': vehicle.member_id,
        'amount': amount,
        'description': description,
    }
    if expense_date is not None:
        fields['expense_date'] = expense_date

    expense = AdditionalExpense.objects.create(**fields)

    logger.info("Expense %s of %s added to vehicle %s by %s", expense.id, amount, vehicle.id, actor.id)
    record_activity_on_commit(
        actor=actor,
        activity_type='expense_added',
        resource_type='vehicle',
        resource_id=vehicle.id,
        metadata={'expense_id': expense.id, 'amount': amount, 'description': description},
    )

    return expense


def get_expense(*, expense_id: UUID, actor: User) -> AdditionalExpense:
    queryset = AdditionalExpense.objects.select_related('vehicle')
    if not actor.is_admin:
        queryset = queryset.filter(vehicle__member=actor)

    try:
        return queryset.get(id=expense_id)
    except (AdditionalExpense.DoesNotExist, ValidationError):
        raise ExpenseNotFoundError("Expense not found")


def list_expenses(*, actor: User, vehicle_id: UUID) -> QuerySet:
    """
    List expenses of a vehicle visible to the actor.

    Raises:
        VehicleNotFoundError: If the vehicle is not visible to the actor
    """
    vehicle = get_vehicle(vehicle_id=vehicle_id, actor=actor)
    return vehicle.expenses.all()


@transaction.atomic
def update_expense(*, expense_id: UUID, actor: User, **changes) -> AdditionalExpense:
    """
    Edit amount, description or date of an expense on an unsold vehicle.

    Raises:
        ExpenseNotFoundError: If the expense is not visible to the actor
        VehicleAlreadySoldError: If the vehicle has been sold
        InvalidAmountError: If amount is not a positive finite number
    """
    expense = _get_expense_for_update(expense_id=expense_id, actor=actor)
    _ensure_not_sold(expense.vehicle)

    changed = []
    if 'amount' in changes:
        expense.amount = clean_amount(changes['amount'])
        changed.append('amount')
    for field in ('description', 'expense_date'):
        if field in changes:
            setattr(expense, field, changes[field])
            changed.append(field)

    if changed:
        expense.save(update_fields=changed + ['updated_at'])
        logger.info("Expense %s updated by %s: %s", expense.id, actor.id, ', '.join(changed))

    return expense


@transaction.atomic
def delete_expense(*, expense_id: UUID, actor: User) -> None:
    """
    Delete an expense from an unsold vehicle.

    Raises:
        ExpenseNotFoundError: If the expense is not visible to the actor
        VehicleAlreadySoldError: If the vehicle has been sold
    """
    expense = _get_expense_for_update(expense_id=expense_id, actor=actor)
    _ensure_not_sold(expense.vehicle)

    metadata = {'expense_id': expense.id, 'amount': expense.amount}
    vehicle_id = expense.vehicle_id
    expense.delete()

    logger.info("Expense %s deleted from vehicle %s by %s", metadata['expense_id'], vehicle_id, actor.id)
    record_activity_on_commit(
        actor=actor,
        activity_type='expense_deleted',
        resource_type='vehicle',
        resource_id=vehicle_id,
        metadata=metadata,
    )
