"""
Sales app services layer.

The calculator is pure; the recorder owns the single transaction that
flips a vehicle to sold and writes its settlement snapshot.
"""

from apps.sales.exceptions import (
    SalesServiceError,
    AlreadySettledError,
    SettlementNotFoundError,
    InvalidAmountError,
    ImmutableSettlementError,
)

from .calculator import (
    SettlementFigures,
    calculate_settlement,
)

from .settlement import (
    settle_sale,
    get_settlement,
    get_settlement_for_vehicle,
    list_settlements,
)

from .statistics import get_member_statistics

from .pool_analytics import get_pool_kpis, get_member_profit_breakdown


__all__ = [
    # Exceptions
    'SalesServiceError',
    'AlreadySettledError',
    'SettlementNotFoundError',
    'InvalidAmountError',
    'ImmutableSettlementError',

    # Calculator
    'SettlementFigures',
    'calculate_settlement',

    # Recorder
    'settle_sale',
    'get_settlement',
    'get_settlement_for_vehicle',
    'list_settlements',

    # Statistics
    'get_member_statistics',
    'get_pool_kpis',
    'get_member_profit_breakdown',
]
