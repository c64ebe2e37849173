"""
Vehicles app services layer.

Inventory and expense changes go through these functions; views stay thin.
Expense writes lock the vehicle row so they serialize with sale settlement.
"""

from .exceptions import (
    VehiclesServiceError,
    VehicleNotFoundError,
    ExpenseNotFoundError,
    DuplicateVinError,
    VehicleAlreadySoldError,
    InvalidAmountError,
)

from .vehicle_management import (
    create_vehicle,
    get_vehicle,
    list_vehicles,
    update_vehicle,
    delete_vehicle,
    visible_vehicles,
)

from .expense_management import (
    add_expense,
    get_expense,
    list_expenses,
    update_expense,
    delete_expense,
)

from .aggregation import get_vehicle_expenses_total

from .validation import clean_amount


__all__ = [
    # Exceptions
    'VehiclesServiceError',
    'VehicleNotFoundError',
    'ExpenseNotFoundError',
    'DuplicateVinError',
    'VehicleAlreadySoldError',
    'InvalidAmountError',

    # Vehicles
    'create_vehicle',
    'get_vehicle',
    'list_vehicles',
    'update_vehicle',
    'delete_vehicle',
    'visible_vehicles',

    # Expenses
    'add_expense',
    'get_expense',
    'list_expenses',
    'update_expense',
    'delete_expense',
    'get_vehicle_expenses_total',

    'clean_amount',
]
