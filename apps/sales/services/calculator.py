"""
Sale settlement arithmetic.

Pure functions over Decimal. The franchise fee is a share of positive
profit only: a loss is never increased by the fee.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from apps.sales.exceptions import InvalidAmountError

CENT = Decimal('0.01')
FEE_PRECISION = Decimal('0.0001')
HUNDRED = Decimal('100')
ZERO = Decimal('0')


def _non_negative(value, field: str) -> Decimal:
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidAmountError(f"{field} must be a number")

    if not amount.is_finite():
        raise InvalidAmountError(f"{field} must be a finite number")
    if amount < 0:
        raise InvalidAmountError(f"{field} cannot be negative")
    return amount


@dataclass(frozen=True)
class SettlementFigures:
    """Exact (unrounded) results for one sale."""

    sold_price: Decimal
    purchase_price: Decimal
    additional_expenses: Decimal
    fee_percentage: Decimal
    total_cost: Decimal
    profit: Decimal
    fee_amount: Decimal
    net_profit: Decimal

    def rounded(self) -> 'SettlementFigures':
        """
        Figures as stored: money in cents (half up), percentage to 4 places.

        Net profit is derived from the rounded profit and fee so the stored
        row always satisfies net_profit == profit - fee_amount.
        """
        profit = self.profit.quantize(CENT, rounding=ROUND_HALF_UP)
        fee_amount = self.fee_amount.quantize(CENT, rounding=ROUND_HALF_UP)
        return SettlementFigures(
            sold_price=self.sold_price.quantize(CENT, rounding=ROUND_HALF_UP),
            purchase_price=self.purchase_price.quantize(CENT, rounding=ROUND_HALF_UP),
            additional_expenses=self.additional_expenses.quantize(CENT, rounding=ROUND_HALF_UP),
            fee_percentage=self.fee_percentage.quantize(FEE_PRECISION, rounding=ROUND_HALF_UP),
            total_cost=self.total_cost.quantize(CENT, rounding=ROUND_HALF_UP),
            profit=profit,
            fee_amount=fee_amount,
            net_profit=profit - fee_amount,
        )


def calculate_settlement(sold_price, purchase_price, additional_expenses, fee_percentage) -> SettlementFigures:
    """
    Compute cost basis, profit, franchise fee and net profit for a sale.

    Args:
        sold_price: Sale price (>= 0)
        purchase_price: Vehicle purchase price (>= 0)
        additional_expenses: Total of additional expenses (>= 0)
        fee_percentage: Franchise fee percentage, e.g. 10 for 10% (>= 0),
            rounded half up to 4 decimal places before use

    Returns:
        SettlementFigures with exact Decimal values

    Raises:
        InvalidAmountError: If any input is negative or not a finite number
    """
    sold_price = _non_negative(sold_price, 'sold_price')
    purchase_price = _non_negative(purchase_price, 'purchase_price')
    additional_expenses = _non_negative(additional_expenses, 'additional_expenses')
    fee_percentage = _non_negative(fee_percentage, 'fee_percentage')
    # Fee is computed from the percentage exactly as it will be stored
    try:
        fee_percentage = fee_percentage.quantize(FEE_PRECISION, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise InvalidAmountError("fee_percentage is too large")

    total_cost = purchase_price + additional_expenses
    profit = sold_price - total_cost
    fee_amount = profit * fee_percentage / HUNDRED if profit > 0 else ZERO

    return SettlementFigures(
        sold_price=sold_price,
        purchase_price=purchase_price,
        additional_expenses=additional_expenses,
        fee_percentage=fee_percentage,
        total_cost=total_cost,
        profit=profit,
        fee_amount=fee_amount,
        net_profit=profit - fee_amount,
    )
