"""
Fund ledger services.

Deposits and withdrawals are append-only entries. Withdrawals recompute the
balance and insert inside one transaction while holding the member row
lock, so two concurrent withdrawals cannot both spend the same money.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.accounts.services import get_member
from apps.activity.services import record_activity_on_commit
from apps.funds.models import FundMovement, MovementKind, MovementStatus
from .balance import get_available_balance
from .exceptions import (
    MovementNotFoundError,
    InvalidAmountError,
    InsufficientBalanceError,
    AlreadyReviewedError,
    InvalidReviewError,
    InvalidMovementKindError,
)

logger = logging.getLogger(__name__)

CENT = Decimal('0.01')


@dataclass(frozen=True)
class FundAdjustment:
    """An admin adjustment with the balance seen on either side of it."""

    movement: FundMovement
    balance_before: Decimal
    balance_after: Decimal


def _clean_amount(value) -> Decimal:
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidAmountError("Amount must be a number")

    if not amount.is_finite():
        raise InvalidAmountError("Amount must be a finite number")

    try:
        cents = amount.quantize(CENT)
    except InvalidOperation:
        raise InvalidAmountError("Amount is too large")
    if cents != amount:
        raise InvalidAmountError("Amount cannot have more than 2 decimal places")

    amount = cents
    if amount <= 0:
        raise InvalidAmountError("Amount must be greater than zero")
    return amount


def _log_movement(movement: FundMovement, actor: User, activity_type: str) -> None:
    record_activity_on_commit(
        actor=actor,
        activity_type=activity_type,
        resource_type='fund_movement',
        resource_id=movement.id,
        metadata={
            'member_id': movement.member_id,
            'kind': movement.kind,
            'amount': movement.amount,
            'status': movement.status,
        },
    )


@transaction.atomic
def record_deposit(
    *,
    member: User,
    amount,
    note: str = "",
    approved_by: Optional[User] = None
) -> FundMovement:
    """
    Record a deposit for a member.

    With approved_by the deposit is approved immediately (admin path);
    without it the deposit waits for review (member self-request).

    Raises:
        InvalidAmountError: If amount is not a positive finite number
    """
    amount = _clean_amount(amount)

    fields = {
        'member': member,
        'kind': MovementKind.DEPOSIT,
        'amount': amount,
        'note': note,
        'created_by': approved_by or member,
    }
    if approved_by is not None:
        fields.update(
            status=MovementStatus.APPROVED,
            reviewed_by=approved_by,
            reviewed_at=timezone.now(),
        )

    movement = FundMovement.objects.create(**fields)

    logger.info(
        "Deposit %s of %s for member %s recorded as %s",
        movement.id, amount, member.id, movement.status,
    )
    _log_movement(movement, approved_by or member, 'deposit_recorded')
    return movement


def request_deposit(*, member: User, amount, note: str = "") -> FundMovement:
    """Member asks to add funds; an admin approves or rejects it later."""
    return record_deposit(member=member, amount=amount, note=note)


@transaction.atomic
def record_withdrawal(
    *,
    member: User,
    amount,
    note: str = "",
    approved_by: User
) -> FundMovement:
    """
    Record an approved withdrawal if the member can cover it.

    Raises:
        MemberNotFoundError: If the member no longer exists
        InvalidAmountError: If amount is not a positive finite number
        InsufficientBalanceError: If amount exceeds the available balance;
            nothing is written in that case
    """
    amount = _clean_amount(amount)

    # Serializes withdrawals for this member until commit
    member = get_member(member_id=member.id, for_update=True)
    available = get_available_balance(member=member).balance

    if amount > available:
        logger.info(
            "Withdrawal of %s for member %s refused, available %s",
            amount, member.id, available,
        )
        raise InsufficientBalanceError(
            f"Insufficient balance: available {available}, requested {amount}"
        )

    movement = FundMovement.objects.create(
        member=member,
        kind=MovementKind.WITHDRAWAL,
        amount=amount,
        note=note,
        status=MovementStatus.APPROVED,
        created_by=approved_by,
        reviewed_by=approved_by,
        reviewed_at=timezone.now(),
    )

    logger.info("Withdrawal %s of %s recorded for member %s", movement.id, amount, member.id)
    _log_movement(movement, approved_by, 'withdrawal_recorded')
    return movement


def admin_adjust_funds(
    *,
    admin: User,
    member_id: UUID,
    amount,
    direction: str,
    note: str = ""
) -> FundMovement:
    """
    Admin adds or removes funds for a member; the entry is approved at once.

    Raises:
        MemberNotFoundError: If the member does not exist
        InvalidMovementKindError: If direction is not deposit or withdrawal
        InvalidAmountError: If amount is not a positive finite number
        InsufficientBalanceError: If a withdrawal exceeds the available balance
    """
    if direction not in MovementKind.values:
        raise InvalidMovementKindError(f"Unknown direction '{direction}'")

    member = get_member(member_id=member_id)

    if direction == MovementKind.WITHDRAWAL:
        return record_withdrawal(member=member, amount=amount, note=note, approved_by=admin)
    return record_deposit(member=member, amount=amount, note=note, approved_by=admin)


@transaction.atomic
def adjust_member_funds(
    *,
    admin: User,
    member_id: UUID,
    amount,
    direction: str,
    note: str = ""
) -> FundAdjustment:
    """
    Run admin_adjust_funds and report the balance before and after it.

    Both balances are read in the same transaction as the insert, with the
    member row locked, so they describe exactly this movement.

    Raises:
        Same as admin_adjust_funds
    """
    if direction not in MovementKind.values:
        raise InvalidMovementKindError(f"Unknown direction '{direction}'")

    member = get_member(member_id=member_id, for_update=True)
    before = get_available_balance(member=member).balance
    movement = admin_adjust_funds(
        admin=admin,
        member_id=member.id,
        amount=amount,
        direction=direction,
        note=note,
    )
    after = get_available_balance(member=member).balance

    return FundAdjustment(movement=movement, balance_before=before, balance_after=after)


@transaction.atomic
def review_fund_movement(
    *,
    admin: User,
    movement_id: UUID,
    decision: str,
    reason: str = ""
) -> FundMovement:
    """
    Approve or reject a pending movement. Both outcomes are final.

    Raises:
        MovementNotFoundError: If the movement does not exist
        AlreadyReviewedError: If the movement is no longer pending
        InvalidReviewError: If decision is unknown or a rejection has no reason
        InsufficientBalanceError: If approving a withdrawal the member cannot cover
    """
    if decision not in (MovementStatus.APPROVED, MovementStatus.REJECTED):
        raise InvalidReviewError(f"Unknown decision '{decision}'")

    reason = (reason or "").strip()
    if decision == MovementStatus.REJECTED and not reason:
        raise InvalidReviewError("A reason is required to reject a fund movement")

    try:
        movement = FundMovement.objects.select_for_update().get(id=movement_id)
    except (FundMovement.DoesNotExist, ValidationError):
        raise MovementNotFoundError("Fund movement not found")

    if not movement.is_pending:
        raise AlreadyReviewedError(f"Fund movement is already {movement.status}")

    if decision == MovementStatus.APPROVED and movement.kind == MovementKind.WITHDRAWAL:
        get_member(member_id=movement.member_id, for_update=True)
        available = get_available_balance(member=movement.member).balance
        if movement.amount > available:
            raise InsufficientBalanceError(
                f"Insufficient balance: available {available}, requested {movement.amount}"
            )

    movement.status = decision
    movement.reviewed_by = admin
    movement.reviewed_at = timezone.now()
    if decision == MovementStatus.REJECTED:
        movement.rejection_reason = reason
    movement.save(update_fields=['status', 'reviewed_by', 'reviewed_at', 'rejection_reason', 'updated_at'])

    logger.info("Fund movement %s %s by %s", movement.id, decision, admin.id)
    _log_movement(movement, admin, f'fund_movement_{decision}')
    return movement
