"""Read and update application settings."""

import logging
from decimal import Decimal, InvalidOperation
from typing import List

from django.conf import settings as django_settings
from django.db import transaction

from apps.accounts.models import User
from apps.activity.services import record_activity_on_commit
from apps.policies.models import AppSetting
from .exceptions import SettingNotFoundError, InvalidSettingValueError

logger = logging.getLogger(__name__)

MIN_FEE_PERCENTAGE = Decimal('0')
MAX_FEE_PERCENTAGE = Decimal('100')
FEE_PLACES = Decimal('0.0001')


def get_setting(*, key: str) -> AppSetting:
    try:
        return AppSetting.objects.get(key=key)
    except AppSetting.DoesNotExist:
        raise SettingNotFoundError(f"Setting '{key}' not found")


def list_settings() -> List[AppSetting]:
    return list(AppSetting.objects.select_related('updated_by').order_by('key'))


def parse_fee_percentage(value: str) -> Decimal:
    """
    Parse a franchise fee percentage.

    Raises:
        InvalidSettingValueError: If the value is not a finite decimal in [0, 100]
            with at most 4 decimal places
    """
    try:
        fee = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise InvalidSettingValueError(f"'{value}' is not a valid percentage")

    if not fee.is_finite() or fee < MIN_FEE_PERCENTAGE or fee > MAX_FEE_PERCENTAGE:
        raise InvalidSettingValueError("Franchise fee percentage must be between 0 and 100")
    if fee != fee.quantize(FEE_PLACES):
        raise InvalidSettingValueError("Franchise fee percentage cannot have more than 4 decimal places")

    return fee


@transaction.atomic
def update_setting(*, key: str, value: str, updated_by: User) -> AppSetting:
    """
    Update an existing setting.

    Args:
        key: Setting key
        value: New value (stored as string)
        updated_by: Administrator making the change

    Returns:
        Updated AppSetting

    Raises:
        SettingNotFoundError: If the key does not exist
        InvalidSettingValueError: If the value is empty or fails key-specific validation
    """
    try:
        setting = AppSetting.objects.select_for_update().get(key=key)
    except AppSetting.DoesNotExist:
        raise SettingNotFoundError(f"Setting '{key}' not found")

    value = str(value).strip()
    if not value:
        raise InvalidSettingValueError("Setting value cannot be empty")

    if key == django_settings.FRANCHISE_FEE_SETTING_KEY:
        value = str(parse_fee_percentage(value))

    old_value = setting.value
    setting.value = value
    setting.updated_by = updated_by
    setting.save(update_fields=['value', 'updated_by', 'updated_at'])

    logger.info("Setting %s changed from %r to %r by %s", key, old_value, value, updated_by.id)
    record_activity_on_commit(
        actor=updated_by,
        activity_type='setting_updated',
        resource_type='app_setting',
        resource_id=key,
        metadata={'old_value': old_value, 'new_value': value},
    )

    return setting
