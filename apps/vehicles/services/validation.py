from decimal import Decimal, InvalidOperation

from .exceptions import InvalidAmountError

CENT = Decimal('0.01')


def clean_amount(value, *, field='amount', allow_zero=False) -> Decimal:
    """
    Convert a monetary input to a Decimal with two decimal places.

    Inputs finer than a cent are rejected rather than rounded, so the stored
    amount is always the amount that was asked for.

    Raises:
        InvalidAmountError: If the value is not a finite number, has more than
            two decimal places, is negative, or is zero when allow_zero is False
    """
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidAmountError(f"{field} must be a number")

    if not amount.is_finite():
        raise InvalidAmountError(f"{field} must be a finite number")
    try:
        cents = amount.quantize(CENT)
    except InvalidOperation:
        raise InvalidAmountError(f"{field} is too large")
    if cents != amount:
        raise InvalidAmountError(f"{field} cannot have more than 2 decimal places")

    amount = cents
    if amount < 0 or (amount == 0 and not allow_zero):
        qualifier = 'zero or greater' if allow_zero else 'greater than zero'
        raise InvalidAmountError(f"{field} must be {qualifier}")

    return amount
