"""
Pool-wide analytics built from vehicle inventory and settlement snapshots.

Both reports accept an optional purchase-date window. Settlements are
matched on their snapshot purchase date, so a sale still counts after its
vehicle has been deleted.
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from django.db.models import Count, Sum

from apps.accounts.models import User, UserRole
from apps.sales.models import SaleSettlement
from apps.vehicles.models import Vehicle, VehicleStatus

ZERO = Decimal('0.00')
CENT = Decimal('0.01')


def _in_window(queryset, start_date: Optional[date], end_date: Optional[date]):
    if start_date:
        queryset = queryset.filter(purchase_date__gte=start_date)
    if end_date:
        queryset = queryset.filter(purchase_date__lte=end_date)
    return queryset


def _ratio(part: Decimal, whole: Decimal) -> Decimal:
    if not whole:
        return ZERO
    return (part / whole * 100).quantize(CENT, rounding=ROUND_HALF_UP)


def get_member_profit_breakdown(
    *,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None
) -> list:
    """
    Net profit and invested capital per member, best performers first.

    A member appears when they bought or sold at least one vehicle in the
    window. profit_ratio is net profit over purchase cost, in percent.

    Returns:
        List of dicts: member, total_invested, net_profit, franchise_fees,
        vehicles_bought, vehicles_sold, profit_ratio
    """
    purchases = {
        row['member_id']: row
        for row in _in_window(Vehicle.objects.all(), start_date, end_date)
        .order_by()
        .values('member_id')
        .annotate(invested=Sum('purchase_price'), bought=Count('id'))
    }
    sales = {
        row['member_id']: row
        for row in _in_window(SaleSettlement.objects.all(), start_date, end_date)
        .order_by()
        .values('member_id')
        .annotate(net=Sum('net_profit'), fees=Sum('franchise_fee_amount'), sold=Count('id'))
    }

    members = User.objects.filter(id__in=set(purchases) | set(sales))

    breakdown = []
    for member in members:
        bought = purchases.get(member.id, {})
        sold = sales.get(member.id, {})
        invested = bought.get('invested') or ZERO
        net_profit = sold.get('net') or ZERO
        breakdown.append({
            'member': member,
            'total_invested': invested,
            'net_profit': net_profit,
            'franchise_fees': sold.get('fees') or ZERO,
            'vehicles_bought': bought.get('bought', 0),
            'vehicles_sold': sold.get('sold', 0),
            'profit_ratio': _ratio(net_profit, invested),
        })

    breakdown.sort(key=lambda row: (-row['net_profit'], row['member'].email))
    return breakdown


def get_pool_kpis(
    *,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None
) -> dict:
    """
    Headline figures for the whole pool.

    This operation:
    1. Sums purchase cost and counts vehicles bought in the window
    2. Sums settlement snapshots (revenue, gross and net profit, fees)
    3. Averages the profit ratio over members with invested capital

    Returns:
        Dictionary with:
        - total_invested, total_revenue, gross_profit, net_profit,
          total_franchise_fees: Decimal
        - vehicles_bought, vehicles_in_stock, vehicles_sold: int
        - total_members: int - active members
        - average_profit_ratio: Decimal - percent
    """
    vehicles = _in_window(Vehicle.objects.all(), start_date, end_date)
    vehicle_totals = vehicles.aggregate(invested=Sum('purchase_price'), bought=Count('id'))

    settlement_totals = _in_window(SaleSettlement.objects.all(), start_date, end_date).aggregate(
        revenue=Sum('sold_price'),
        gross=Sum('profit'),
        net=Sum('net_profit'),
        fees=Sum('franchise_fee_amount'),
        sold=Count('id'),
    )

    ratios = [
        row['profit_ratio']
        for row in get_member_profit_breakdown(start_date=start_date, end_date=end_date)
        if row['total_invested'] > 0
    ]
    average_ratio = (
        (sum(ratios) / len(ratios)).quantize(CENT, rounding=ROUND_HALF_UP) if ratios else ZERO
    )

    return {
        'total_invested': vehicle_totals['invested'] or ZERO,
        'total_revenue': settlement_totals['revenue'] or ZERO,
        'gross_profit': settlement_totals['gross'] or ZERO,
        'net_profit': settlement_totals['net'] or ZERO,
        'total_franchise_fees': settlement_totals['fees'] or ZERO,
        'vehicles_bought': vehicle_totals['bought'],
        'vehicles_in_stock': vehicles.filter(status=VehicleStatus.IN_STOCK).count(),
        'vehicles_sold': settlement_totals['sold'],
        'total_members': User.objects.filter(role=UserRole.MEMBER, is_active=True).count(),
        'average_profit_ratio': average_ratio,
    }
