"""Franchise fee policy resolver."""

import logging
from decimal import Decimal

from django.conf import settings

from apps.policies.models import AppSetting
from .exceptions import PolicyUnavailableError, InvalidSettingValueError
from .setting_management import parse_fee_percentage

logger = logging.getLogger(__name__)


def load_franchise_fee_percentage() -> Decimal:
    """
    Read the franchise fee percentage from the settings store.

    Raises:
        PolicyUnavailableError: If the setting is missing or not a valid percentage
    """
    key = settings.FRANCHISE_FEE_SETTING_KEY
    value = AppSetting.objects.filter(key=key).values_list('value', flat=True).first()
    if value is None:
        raise PolicyUnavailableError(f"Setting '{key}' is not configured")

    try:
        return parse_fee_percentage(value)
    except InvalidSettingValueError as e:
        raise PolicyUnavailableError(f"Setting '{key}' is invalid: {e}")


def get_franchise_fee_percentage() -> Decimal:
    """
    Return the franchise fee percentage currently in force.

    Read on every call so each settlement sees the value at that moment.
    A missing or unreadable policy counts as no fee.
    """
    try:
        return load_franchise_fee_percentage()
    except PolicyUnavailableError as e:
        logger.warning("Franchise fee policy unavailable, using 0%%: %s", e)
        return Decimal('0')
