"""
Funds app services layer.

The ledger is the source of truth; balances are computed on read.
"""

from .exceptions import (
    FundsServiceError,
    MovementNotFoundError,
    InvalidAmountError,
    InsufficientBalanceError,
    AlreadyReviewedError,
    InvalidReviewError,
    InvalidMovementKindError,
)

from .balance import (
    BalanceSummary,
    get_available_balance,
)

from .ledger import (
    FundAdjustment,
    record_deposit,
    request_deposit,
    record_withdrawal,
    admin_adjust_funds,
    adjust_member_funds,
    review_fund_movement,
)

from .queries import (
    get_movement,
    list_movements,
    get_movement_stats,
)


__all__ = [
    # Exceptions
    'FundsServiceError',
    'MovementNotFoundError',
    'InvalidAmountError',
    'InsufficientBalanceError',
    'AlreadyReviewedError',
    'InvalidReviewError',
    'InvalidMovementKindError',

    # Balance
    'BalanceSummary',
    'get_available_balance',

    # Ledger
    'record_deposit',
    'request_deposit',
    'record_withdrawal',
    'FundAdjustment',
    'admin_adjust_funds',
    'adjust_member_funds',
    'review_fund_movement',

    # Queries
    'get_movement',
    'list_movements',
    'get_movement_stats',
]
