"""
Policies app services layer.

Settings are plain strings in the database; the fee policy resolver turns
the franchise fee entry into a Decimal percentage.
"""

from .exceptions import (
    PoliciesServiceError,
    SettingNotFoundError,
    InvalidSettingValueError,
    PolicyUnavailableError,
)

from .setting_management import (
    get_setting,
    list_settings,
    update_setting,
    parse_fee_percentage,
)

from .fee_policy import (
    get_franchise_fee_percentage,
    load_franchise_fee_percentage,
)


__all__ = [
    # Exceptions
    'PoliciesServiceError',
    'SettingNotFoundError',
    'InvalidSettingValueError',
    'PolicyUnavailableError',

    # Settings
    'get_setting',
    'list_settings',
    'update_setting',
    'parse_fee_percentage',

    # Fee policy
    'get_franchise_fee_percentage',
    'load_franchise_fee_percentage',
]
