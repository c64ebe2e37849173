import pytest
from decimal import Decimal
from unittest.mock import patch

from django.db import IntegrityError, transaction
from hypothesis import given, settings as hypothesis_settings, strategies as st, HealthCheck

from apps.accounts.services import get_member, MemberNotFoundError
from apps.activity.models import ActivityLog
from apps.funds.models import FundMovement, MovementKind, MovementStatus
from apps.funds.services import (
    get_available_balance,
    request_deposit,
    record_deposit,
    record_withdrawal,
    admin_adjust_funds,
    adjust_member_funds,
    review_fund_movement,
    list_movements,
    get_movement,
    get_movement_stats,
    MovementNotFoundError,
    InvalidAmountError,
    InsufficientBalanceError,
    AlreadyReviewedError,
    InvalidReviewError,
    InvalidMovementKindError,
)


@pytest.mark.django_db
class TestAvailableBalance:

    def test_empty_ledger(self, member):
        summary = get_available_balance(member=member)

        assert summary.balance == Decimal('0.00')
        assert summary.invested_capital == Decimal('0.00')

    def test_pending_deposits_ignored(self, member, make_movement, make_vehicle):
        make_movement(member, '1000.00')
        make_movement(member, '500.00', status=MovementStatus.PENDING)
        make_vehicle(member, '700.00')

        summary = get_available_balance(member=member)

        assert summary.balance == Decimal('300.00')
        assert summary.invested_capital == Decimal('1000.00')
        assert summary.total_purchase_cost == Decimal('700.00')

    def test_withdrawals_subtract(self, member, make_movement):
        make_movement(member, '1000.00')
        make_movement(member, '250.00', kind=MovementKind.WITHDRAWAL)

        summary = get_available_balance(member=member)

        assert summary.balance == Decimal('750.00')
        assert summary.net_deposits == Decimal('750.00')
        assert summary.total_withdrawals == Decimal('250.00')

    def test_rejected_ignored(self, member, make_movement):
        make_movement(member, '1000.00', status=MovementStatus.REJECTED)

        assert get_available_balance(member=member).balance == Decimal('0.00')

    def test_clamped_at_zero(self, member, make_movement, make_vehicle):
        make_movement(member, '100.00')
        make_vehicle(member, '900.00')

        summary = get_available_balance(member=member)

        assert summary.balance == Decimal('0.00')
        # Vehicles entered without deposits still count as invested
        assert summary.invested_capital == Decimal('900.00')

    def test_sold_vehicles_still_count(self, member, make_movement, make_vehicle):
        make_movement(member, '1000.00')
        vehicle = make_vehicle(member, '400.00')
        vehicle.status = 'sold'
        vehicle.save()

        assert get_available_balance(member=member).balance == Decimal('600.00')

    def test_other_members_ignored(self, member, other_member, make_movement):
        make_movement(other_member, '1000.00')

        assert get_available_balance(member=member).balance == Decimal('0.00')


@pytest.mark.django_db
class TestDeposits:

    def test_request_deposit_is_pending(self, member):
        movement = request_deposit(member=member, amount='250', note='Top up')

        assert movement.status == MovementStatus.PENDING
        assert movement.kind == MovementKind.DEPOSIT
        assert movement.amount == Decimal('250.00')
        assert movement.created_by == member
        assert get_available_balance(member=member).balance == Decimal('0.00')

    def test_record_deposit_with_approver(self, member, admin_account):
        movement = record_deposit(member=member, amount=Decimal('100'), approved_by=admin_account)

        assert movement.status == MovementStatus.APPROVED
        assert movement.reviewed_by == admin_account
        assert movement.reviewed_at is not None

    @pytest.mark.parametrize('amount', ['0', '-5', 'NaN', 'Infinity', 'abc', '0.005', '10.001'])
    def test_invalid_amount(self, member, amount):
        with pytest.raises(InvalidAmountError):
            request_deposit(member=member, amount=amount)

        assert FundMovement.objects.count() == 0

    def test_amount_check_constraint(self, member):
        """The database refuses non-positive amounts outright."""
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                FundMovement.objects.create(member=member, amount=Decimal('-1.00'))


@pytest.mark.django_db
class TestWithdrawals:

    def test_withdrawal_within_balance(self, member, admin_account, make_movement):
        make_movement(member, '1000.00')

        movement = record_withdrawal(member=member, amount='400', approved_by=admin_account)

        assert movement.kind == MovementKind.WITHDRAWAL
        assert movement.status == MovementStatus.APPROVED
        assert movement.amount == Decimal('400.00')
        assert get_available_balance(member=member).balance == Decimal('600.00')

    def test_withdrawal_exceeding_balance(self, member, admin_account, make_movement):
        make_movement(member, '1000.00')

        with pytest.raises(InsufficientBalanceError):
            record_withdrawal(member=member, amount='1200', approved_by=admin_account)

        assert FundMovement.objects.filter(kind=MovementKind.WITHDRAWAL).count() == 0
        assert get_available_balance(member=member).balance == Decimal('1000.00')

    def test_withdrawal_of_entire_balance(self, member, admin_account, make_movement):
        make_movement(member, '1000.00')

        record_withdrawal(member=member, amount='1000', approved_by=admin_account)

        assert get_available_balance(member=member).balance == Decimal('0.00')

    def test_withdrawal_locks_member_row(self, member, admin_account, make_movement):
        make_movement(member, '100.00')

        with patch('apps.funds.services.ledger.get_member', wraps=lambda **kw: member) as locked:
            record_withdrawal(member=member, amount='50', approved_by=admin_account)

        locked.assert_called_once_with(member_id=member.id, for_update=True)

    def test_second_withdrawal_sees_first(self, member, admin_account, make_movement):
        make_movement(member, '1000.00')
        record_withdrawal(member=member, amount='700', approved_by=admin_account)

        with pytest.raises(InsufficientBalanceError):
            record_withdrawal(member=member, amount='700', approved_by=admin_account)


@pytest.mark.django_db
class TestAdminAdjustFunds:

    def test_deposit(self, member, admin_account, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            movement = admin_adjust_funds(
                admin=admin_account,
                member_id=member.id,
                amount='300',
                direction='deposit',
            )

        assert movement.status == MovementStatus.APPROVED
        assert movement.created_by == admin_account
        assert ActivityLog.objects.filter(activity_type='deposit_recorded').exists()

    def test_withdrawal(self, member, admin_account, make_movement):
        make_movement(member, '300.00')

        movement = admin_adjust_funds(
            admin=admin_account,
            member_id=member.id,
            amount='100',
            direction='withdrawal',
            note='Payout',
        )

        assert movement.kind == MovementKind.WITHDRAWAL
        assert get_available_balance(member=member).balance == Decimal('200.00')

    def test_unknown_direction(self, member, admin_account):
        with pytest.raises(InvalidMovementKindError):
            admin_adjust_funds(admin=admin_account, member_id=member.id, amount='1', direction='transfer')

    def test_unknown_member(self, admin_account):
        with pytest.raises(MemberNotFoundError):
            admin_adjust_funds(admin=admin_account, member_id=admin_account.id, amount='1', direction='deposit')

    def test_sub_cent_withdrawal_rejected(self, member, admin_account, make_movement):
        make_movement(member, '10.00')

        with pytest.raises(InvalidAmountError):
            admin_adjust_funds(admin=admin_account, member_id=member.id, amount='0.005', direction='withdrawal')

        assert get_available_balance(member=member).balance == Decimal('10.00')


@pytest.mark.django_db
class TestAdjustMemberFunds:

    def test_reports_balance_around_withdrawal(self, member, admin_account, make_movement):
        make_movement(member, '1000.00')

        adjustment = adjust_member_funds(
            admin=admin_account,
            member_id=member.id,
            amount='250',
            direction='withdrawal',
        )

        assert adjustment.movement.kind == MovementKind.WITHDRAWAL
        assert adjustment.balance_before == Decimal('1000.00')
        assert adjustment.balance_after == Decimal('750.00')

    def test_reports_balance_around_deposit(self, member, admin_account):
        adjustment = adjust_member_funds(
            admin=admin_account,
            member_id=member.id,
            amount='40.50',
            direction='deposit',
        )

        assert adjustment.balance_before == Decimal('0.00')
        assert adjustment.balance_after == Decimal('40.50')

    def test_balances_read_under_member_lock(self, member, admin_account, make_movement):
        make_movement(member, '500.00')

        with patch('apps.funds.services.ledger.get_member', wraps=get_member) as lookup:
            adjust_member_funds(
                admin=admin_account,
                member_id=member.id,
                amount='100',
                direction='withdrawal',
            )

        assert lookup.call_args_list[0].kwargs == {'member_id': member.id, 'for_update': True}

    def test_refused_withdrawal_writes_nothing(self, member, admin_account, make_movement):
        make_movement(member, '100.00')

        with pytest.raises(InsufficientBalanceError):
            adjust_member_funds(
                admin=admin_account,
                member_id=member.id,
                amount='100.01',
                direction='withdrawal',
            )

        assert FundMovement.objects.filter(kind=MovementKind.WITHDRAWAL).count() == 0


@pytest.mark.django_db
class TestReviewFundMovement:

    def test_approve(self, pending_deposit, admin_account):
        movement = review_fund_movement(
            admin=admin_account,
            movement_id=pending_deposit.id,
            decision=MovementStatus.APPROVED,
        )

        assert movement.status == MovementStatus.APPROVED
        assert movement.reviewed_by == admin_account
        assert get_available_balance(member=movement.member).balance == Decimal('500.00')

    def test_reject_requires_reason(self, pending_deposit, admin_account):
        with pytest.raises(InvalidReviewError):
            review_fund_movement(
                admin=admin_account,
                movement_id=pending_deposit.id,
                decision=MovementStatus.REJECTED,
                reason='  ',
            )

        pending_deposit.refresh_from_db()
        assert pending_deposit.status == MovementStatus.PENDING

    def test_reject_with_reason(self, pending_deposit, admin_account):
        movement = review_fund_movement(
            admin=admin_account,
            movement_id=pending_deposit.id,
            decision=MovementStatus.REJECTED,
            reason='No transfer received',
        )

        assert movement.status == MovementStatus.REJECTED
        assert movement.rejection_reason == 'No transfer received'

    @pytest.mark.parametrize('first', [MovementStatus.APPROVED, MovementStatus.REJECTED])
    def test_review_is_terminal(self, pending_deposit, admin_account, first):
        review_fund_movement(
            admin=admin_account,
            movement_id=pending_deposit.id,
            decision=first,
            reason='reason',
        )

        with pytest.raises(AlreadyReviewedError):
            review_fund_movement(
                admin=admin_account,
                movement_id=pending_deposit.id,
                decision=MovementStatus.APPROVED,
            )

    def test_unknown_decision(self, pending_deposit, admin_account):
        with pytest.raises(InvalidReviewError):
            review_fund_movement(admin=admin_account, movement_id=pending_deposit.id, decision='pending')

    def test_unknown_movement(self, admin_account):
        with pytest.raises(MovementNotFoundError):
            review_fund_movement(
                admin=admin_account,
                movement_id='00000000-0000-0000-0000-000000000000',
                decision=MovementStatus.APPROVED,
            )

    def test_pending_withdrawal_needs_cover(self, member, admin_account, make_movement):
        withdrawal = make_movement(member, '50.00', kind=MovementKind.WITHDRAWAL, status=MovementStatus.PENDING)

        with pytest.raises(InsufficientBalanceError):
            review_fund_movement(admin=admin_account, movement_id=withdrawal.id, decision=MovementStatus.APPROVED)


@pytest.mark.django_db
class TestMovementQueries:

    def test_member_sees_own(self, member, other_member, make_movement):
        own = make_movement(member, '10.00')
        make_movement(other_member, '20.00')

        assert list(list_movements(actor=member)) == [own]

    def test_admin_filters(self, member, other_member, admin_account, make_movement):
        make_movement(member, '10.00')
        pending = make_movement(other_member, '20.00', status=MovementStatus.PENDING)

        assert list(list_movements(actor=admin_account, status=MovementStatus.PENDING)) == [pending]
        assert list(list_movements(actor=admin_account, member_id=other_member.id)) == [pending]
        assert list_movements(actor=admin_account).count() == 2

    def test_get_other_members_movement(self, other_member, member, make_movement):
        movement = make_movement(other_member, '10.00')

        with pytest.raises(MovementNotFoundError):
            get_movement(movement_id=movement.id, actor=member)

    def test_stats(self, member, make_movement):
        make_movement(member, '100.00')
        make_movement(member, '50.00', status=MovementStatus.PENDING)
        make_movement(member, '25.00', status=MovementStatus.REJECTED)

        stats = get_movement_stats(actor=member)

        assert stats['total'] == 3
        assert stats['pending'] == 1
        assert stats['approved'] == 1
        assert stats['rejected'] == 1
        assert stats['total_amount_requested'] == Decimal('175.00')
        assert stats['total_amount_approved'] == Decimal('100.00')

    def test_stats_empty(self, member):
        stats = get_movement_stats(actor=member)

        assert stats['total'] == 0
        assert stats['total_amount_approved'] == Decimal('0.00')


money = st.decimals(min_value=Decimal('0.01'), max_value=Decimal('100000'), places=2)
operations = st.lists(
    st.tuples(st.sampled_from(['deposit', 'withdrawal', 'purchase']), money),
    max_size=12,
)


@pytest.mark.django_db
class TestBalanceProperties:

    @hypothesis_settings(
        max_examples=30,
        deadline=None,
        suppress_health_check=[HealthCheck.function_scoped_fixture],
    )
    @given(ops=operations)
    def test_balance_never_negative(self, member, admin_account, make_vehicle, ops):
        with transaction.atomic():
            for index, (op, amount) in enumerate(ops):
                if op == 'deposit':
                    record_deposit(member=member, amount=amount, approved_by=admin_account)
                elif op == 'withdrawal':
                    available = get_available_balance(member=member).balance
                    if amount > available:
                        with pytest.raises(InsufficientBalanceError):
                            record_withdrawal(member=member, amount=amount, approved_by=admin_account)
                    else:
                        record_withdrawal(member=member, amount=amount, approved_by=admin_account)
                else:
                    make_vehicle(member, amount, vin=f'PROP{index}')

                summary = get_available_balance(member=member)
                assert summary.balance >= 0
                assert summary.invested_capital >= summary.total_purchase_cost

            transaction.set_rollback(True)
