"""Statistics service - Member sales and portfolio aggregations."""

from decimal import Decimal, ROUND_HALF_UP

from django.db.models import Count, Q, Sum

from apps.accounts.models import User
from apps.funds.services import get_available_balance
from apps.sales.models import SaleSettlement
from apps.vehicles.models import VehicleStatus

ZERO = Decimal('0.00')
CENT = Decimal('0.01')
RECENT_SALES_LIMIT = 5


def _margin(part: Decimal, whole: Decimal) -> Decimal:
    """Percentage of part in whole, 0 when whole is 0."""
    if not whole:
        return ZERO
    return (part / whole * 100).quantize(CENT, rounding=ROUND_HALF_UP)


def get_member_statistics(*, member: User) -> dict:
    """
    Calculate portfolio statistics for a member.

    This operation:
    1. Counts vehicles by status
    2. Sums settlement snapshots (revenue, profit, fees, expenses)
    3. Derives profit margins from revenue
    4. Adds available balance and invested capital from the fund ledger
    5. Lists the most recent settlements

    Args:
        member: Member to report on

    Returns:
        Dictionary with statistics:
        - vehicles: dict - total, in_stock, sold counts
        - financials: dict - total_revenue, gross_profit, net_profit,
          franchise_fees, additional_expenses, profit_margin,
          net_profit_margin (Decimal, margins in percent)
        - balance: dict - available_balance, invested_capital
        - recent_sales: list - up to 5 latest SaleSettlement instances

    Example:
        >>> stats = get_member_statistics(member=user)
        >>> stats['vehicles']['sold']
        3
    """
    vehicle_counts = member.vehicles.aggregate(
        total=Count('id'),
        in_stock=Count('id', filter=Q(status=VehicleStatus.IN_STOCK)),
        sold=Count('id', filter=Q(status=VehicleStatus.SOLD)),
    )

    settlements = SaleSettlement.objects.filter(member=member)
    totals = settlements.aggregate(
        revenue=Sum('sold_price'),
        gross_profit=Sum('profit'),
        net_profit=Sum('net_profit'),
        fees=Sum('franchise_fee_amount'),
        expenses=Sum('additional_expenses'),
    )
    revenue = totals['revenue'] or ZERO
    gross_profit = totals['gross_profit'] or ZERO
    net_profit = totals['net_profit'] or ZERO

    summary = get_available_balance(member=member)

    return {
        'vehicles': vehicle_counts,
        'financials': {
            'total_revenue': revenue,
            'gross_profit': gross_profit,
            'net_profit': net_profit,
            'franchise_fees': totals['fees'] or ZERO,
            'additional_expenses': totals['expenses'] or ZERO,
            'profit_margin': _margin(gross_profit, revenue),
            'net_profit_margin': _margin(net_profit, revenue),
        },
        'balance': {
            'available_balance': summary.balance,
            'invested_capital': summary.invested_capital,
        },
        'recent_sales': list(settlements.order_by('-sold_date', '-created_at')[:RECENT_SALES_LIMIT]),
    }
