"""Sale recorder: settle a vehicle sale exactly once."""

import logging
from datetime import date
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction, IntegrityError
from django.db.models import QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.activity.services import record_activity_on_commit
from apps.policies.services import get_franchise_fee_percentage
from apps.sales.exceptions import AlreadySettledError, InvalidAmountError, SettlementNotFoundError
from apps.sales.models import SaleSettlement
from apps.vehicles.models import Vehicle, VehicleStatus
from apps.vehicles.services import get_vehicle, get_vehicle_expenses_total
from .calculator import calculate_settlement

logger = logging.getLogger(__name__)


def _lock_vehicle(*, vehicle_id: UUID, actor: User) -> Vehicle:
    """Load and row-lock a vehicle visible to the actor."""
    return get_vehicle(vehicle_id=vehicle_id, actor=actor, for_update=True)


def settle_sale(
    *,
    actor: User,
    vehicle_id: UUID,
    sold_price,
    sold_date: Optional[date] = None
) -> SaleSettlement:
    """
    Record the sale of a vehicle and mark it sold.

    The status flip and the settlement insert happen in one transaction.
    The flip is a conditional update that only succeeds while the vehicle is
    still in stock, so concurrent calls cannot both settle it. The unique
    vehicle column on SaleSettlement backs this up.

    Args:
        actor: Owning member, or an admin acting on any vehicle
        vehicle_id: Vehicle to settle
        sold_price: Sale price (>= 0)
        sold_date: Date of sale (defaults to today)

    Returns:
        The created SaleSettlement

    Raises:
        VehicleNotFoundError: If the vehicle is not visible to the actor
        AlreadySettledError: If the vehicle is already sold
        InvalidAmountError: If sold_price is negative, not finite or finer than a cent
    """
    sold_date = sold_date or timezone.localdate()

    with transaction.atomic():
        vehicle = _lock_vehicle(vehicle_id=vehicle_id, actor=actor)
        if vehicle.is_sold:
            raise AlreadySettledError("Vehicle is already sold")

        expenses_total = get_vehicle_expenses_total(vehicle_id=vehicle.id)
        fee_percentage = get_franchise_fee_percentage()
        exact = calculate_settlement(
            sold_price,
            vehicle.purchase_price,
            expenses_total,
            fee_percentage,
        )
        figures = exact.rounded()
        if figures.sold_price != exact.sold_price:
            raise InvalidAmountError("sold_price cannot have more than 2 decimal places")

        claimed = Vehicle.objects.filter(
            id=vehicle.id,
            status=VehicleStatus.IN_STOCK,
        ).update(status=VehicleStatus.SOLD, updated_at=timezone.now())
        if claimed != 1:
            raise AlreadySettledError("Vehicle is already sold")

        try:
            with transaction.atomic():
                settlement = SaleSettlement.objects.create(
                    vehicle_id=vehicle.id,
                    member_id=vehicle.member_id,
                    sold_price=figures.sold_price,
                    sold_date=sold_date,
                    vin=vehicle.vin,
                    make=vehicle.make,
                    model=vehicle.model,
                    year=vehicle.year,
                    purchase_price=figures.purchase_price,
                    purchase_date=vehicle.purchase_date,
                    additional_expenses=figures.additional_expenses,
                    profit=figures.profit,
                    franchise_fee_percentage=figures.fee_percentage,
                    franchise_fee_amount=figures.fee_amount,
                    net_profit=figures.net_profit,
                    settled_by=actor,
                )
        except IntegrityError:
            raise AlreadySettledError("Vehicle already has a settlement")

        logger.info(
            "Vehicle %s settled by %s: sold %s, profit %s, fee %s (%s%%), net %s",
            vehicle.id, actor.id, figures.sold_price, figures.profit,
            figures.fee_amount, figures.fee_percentage, figures.net_profit,
        )
        record_activity_on_commit(
            actor=actor,
            activity_type='vehicle_sold',
            resource_type='vehicle',
            resource_id=vehicle.id,
            metadata={
                'settlement_id': settlement.id,
                'member_id': vehicle.member_id,
                'sold_price': figures.sold_price,
                'profit': figures.profit,
                'franchise_fee_amount': figures.fee_amount,
                'net_profit': figures.net_profit,
            },
        )

    return settlement


def _visible_settlements(actor: User) -> QuerySet:
    queryset = SaleSettlement.objects.select_related('member', 'settled_by')
    if actor.is_admin:
        return queryset
    return queryset.filter(member=actor)


def get_settlement(*, settlement_id: UUID, actor: User) -> SaleSettlement:
    """
    Raises:
        SettlementNotFoundError: If it does not exist or belongs to another member
    """
    try:
        return _visible_settlements(actor).get(id=settlement_id)
    except (SaleSettlement.DoesNotExist, ValidationError):
        raise SettlementNotFoundError("Settlement not found")


def get_settlement_for_vehicle(*, vehicle_id: UUID, actor: User) -> SaleSettlement:
    """
    Raises:
        SettlementNotFoundError: If the vehicle has no settlement visible to the actor
    """
    try:
        return _visible_settlements(actor).get(vehicle_id=vehicle_id)
    except (SaleSettlement.DoesNotExist, ValidationError):
        raise SettlementNotFoundError("Settlement not found for this vehicle")


def list_settlements(*, actor: User, member: Optional[User] = None) -> QuerySet:
    """List settlements visible to the actor, optionally for one member."""
    queryset = _visible_settlements(actor)
    if member is not None:
        queryset = queryset.filter(member=member)
    return queryset.order_by('-sold_date', '-created_at')
