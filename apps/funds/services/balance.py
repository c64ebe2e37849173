"""Balance calculator derived from the fund ledger and vehicle purchases."""

from dataclasses import dataclass
from decimal import Decimal

from django.db.models import Q, Sum

from apps.accounts.models import User
from apps.funds.models import FundMovement, MovementKind, MovementStatus
from apps.vehicles.models import Vehicle

ZERO = Decimal('0.00')


@dataclass(frozen=True)
class BalanceSummary:
    balance: Decimal
    invested_capital: Decimal
    net_deposits: Decimal
    total_approved_deposits: Decimal
    total_withdrawals: Decimal
    total_purchase_cost: Decimal


def get_available_balance(*, member: User) -> BalanceSummary:
    """
    Derive a member's spendable balance.

    balance = max(0, approved deposits - approved withdrawals - purchase cost)
    invested_capital = max(approved deposits, purchase cost)

    Purchase cost covers every vehicle the member holds, sold or in stock.
    The balance is clamped at zero and never stored.
    """
    totals = FundMovement.objects.filter(
        member=member,
        status=MovementStatus.APPROVED,
    ).aggregate(
        deposits=Sum('amount', filter=Q(kind=MovementKind.DEPOSIT)),
        withdrawals=Sum('amount', filter=Q(kind=MovementKind.WITHDRAWAL)),
    )
    deposits = totals['deposits'] or ZERO
    withdrawals = totals['withdrawals'] or ZERO

    purchase_cost = Vehicle.objects.filter(member=member).aggregate(
        total=Sum('purchase_price')
    )['total'] or ZERO

    net_deposits = deposits - withdrawals

    return BalanceSummary(
        balance=max(ZERO, net_deposits - purchase_cost),
        invested_capital=max(deposits, purchase_cost),
        net_deposits=net_deposits,
        total_approved_deposits=deposits,
        total_withdrawals=withdrawals,
        total_purchase_cost=purchase_cost,
    )
