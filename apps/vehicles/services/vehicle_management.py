"""Vehicle inventory services."""

import logging
from datetime import date
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction, IntegrityError
from django.db.models import Q, QuerySet

from apps.accounts.models import User
from apps.accounts.services import get_member
from apps.activity.services import record_activity_on_commit
from apps.vehicles.models import Vehicle
from .exceptions import VehicleNotFoundError, DuplicateVinError
from .validation import clean_amount

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = ('purchase_date', 'year', 'model', 'purchase_price', 'created_at')
UPDATABLE_FIELDS = ('make', 'model', 'year', 'purchase_price', 'purchase_date', 'notes')


def _normalize_vin(vin: str) -> str:
    return vin.strip().upper()


def visible_vehicles(actor: User) -> QuerySet:
    """Vehicles the actor may see: all for admins, own for members."""
    queryset = Vehicle.objects.select_related('member')
    if actor.is_admin:
        return queryset
    return queryset.filter(member=actor)


@transaction.atomic
def create_vehicle(
    *,
    actor: User,
    vin: str,
    model: str,
    year: int,
    purchase_price,
    make: str = "",
    purchase_date: Optional[date] = None,
    notes: str = "",
    member_id: Optional[UUID] = None
) -> Vehicle:
    """
    Add a vehicle to a member's inventory.

    Members always add to their own inventory. Admins add on behalf of
    the member given by member_id.

    Raises:
        MemberNotFoundError: If an admin names an unknown member
        DuplicateVinError: If the member already has this VIN
        InvalidAmountError: If purchase_price is negative or not finite
    """
    if actor.is_admin:
        owner = get_member(member_id=member_id)
    else:
        owner = actor

    vin = _normalize_vin(vin)
    purchase_price = clean_amount(purchase_price, field='purchase_price', allow_zero=True)

    if Vehicle.objects.filter(member=owner, vin=vin).exists():
        raise DuplicateVinError("A vehicle with this VIN already exists in this inventory")

    fields = {
        'member': owner,
        'vin': vin,
        'make': make,
        'model': model,
        'year': year,
        'purchase_price': purchase_price,
        'notes': notes,
    }
    if purchase_date is not None:
        fields['purchase_date'] = purchase_date

    try:
        with transaction.atomic():
            vehicle = Vehicle.objects.create(**fields)
    except IntegrityError:
        raise DuplicateVinError("A vehicle with this VIN already exists in this inventory")

    logger.info("Vehicle %s (%s) added for member %s by %s", vehicle.id, vin, owner.id, actor.id)
    record_activity_on_commit(
        actor=actor,
        activity_type='vehicle_created',
        resource_type='vehicle',
        resource_id=vehicle.id,
        metadata={
            'member_id': owner.id,
            'vin': vin,
            'purchase_price': purchase_price,
            'on_behalf': actor.id != owner.id,
        },
    )

    return vehicle


def get_vehicle(*, vehicle_id: UUID, actor: User, for_update: bool = False) -> Vehicle:
    """
    Fetch a vehicle visible to the actor.

    Raises:
        VehicleNotFoundError: If it does not exist or belongs to another member
    """
    queryset = visible_vehicles(actor)
    if for_update:
        queryset = queryset.select_for_update(of=('self',))

    try:
        return queryset.get(id=vehicle_id)
    except (Vehicle.DoesNotExist, ValidationError):
        raise VehicleNotFoundError("Vehicle not found")


def list_vehicles(
    *,
    actor: User,
    status: Optional[str] = None,
    search: Optional[str] = None,
    sort: Optional[str] = None,
    order: str = 'desc',
    member_id: Optional[UUID] = None
) -> QuerySet:
    """
    List vehicles visible to the actor.

    Args:
        actor: Requesting user
        status: Optional status filter
        search: Case-insensitive match on model or VIN
        sort: One of SORTABLE_FIELDS (defaults to newest first)
        order: 'asc' or 'desc'
        member_id: Admin-only filter on owner
    """
    queryset = visible_vehicles(actor)

    if member_id and actor.is_admin:
        queryset = queryset.filter(member_id=member_id)
    if status:
        queryset = queryset.filter(status=status)
    if search:
        queryset = queryset.filter(Q(model__icontains=search) | Q(vin__icontains=search))

    if sort in SORTABLE_FIELDS:
        prefix = '' if order == 'asc' else '-'
        return queryset.order_by(f'{prefix}{sort}', '-created_at')
    return queryset.order_by('-created_at')


@transaction.atomic
def update_vehicle(*, vehicle_id: UUID, actor: User, **changes) -> Vehicle:
    """
    Edit purchase attributes of a vehicle.

    Status and VIN are not editable here. Settlements keep their own snapshot,
    so edits after a sale do not alter recorded results.

    Raises:
        VehicleNotFoundError: If the vehicle is not visible to the actor
        InvalidAmountError: If purchase_price is negative or not finite
    """
    vehicle = get_vehicle(vehicle_id=vehicle_id, actor=actor, for_update=True)

    changed = []
    for field in UPDATABLE_FIELDS:
        if field not in changes:
            continue
        value = changes[field]
        if field == 'purchase_price':
            value = clean_amount(value, field='purchase_price', allow_zero=True)
        setattr(vehicle, field, value)
        changed.append(field)

    if changed:
        vehicle.save(update_fields=changed + ['updated_at'])
        logger.info("Vehicle %s updated by %s: %s", vehicle.id, actor.id, ', '.join(changed))

    return vehicle


@transaction.atomic
def delete_vehicle(*, vehicle_id: UUID, actor: User) -> None:
    """
    Delete a vehicle and its expenses.

    Raises:
        VehicleNotFoundError: If the vehicle is not visible to the actor
    """
    vehicle = get_vehicle(vehicle_id=vehicle_id, actor=actor, for_update=True)
    snapshot = {'vin': vehicle.vin, 'member_id': vehicle.member_id, 'status': vehicle.status}
    vehicle_pk = vehicle.id

    vehicle.delete()

    logger.info("Vehicle %s deleted by %s", vehicle_pk, actor.id)
    record_activity_on_commit(
        actor=actor,
        activity_type='vehicle_deleted',
        resource_type='vehicle',
        resource_id=vehicle_pk,
        metadata=snapshot,
    )
