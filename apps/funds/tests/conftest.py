import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.funds.models import FundMovement, MovementKind, MovementStatus
from apps.vehicles.models import Vehicle


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def member(db):
    return User.objects.create_user(
        email='member@example.com',
        password='TestPass123!',
        display_name='Member',
    )


@pytest.fixture
def other_member(db):
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        display_name='Other Member',
    )


@pytest.fixture
def admin_account(db):
    return User.objects.create_admin(
        email='admin@example.com',
        password='AdminPass123!',
        display_name='Admin',
    )


@pytest.fixture
def make_movement(admin_account):
    """Factory for ledger entries written directly to the database."""
    def _make(member, amount, kind=MovementKind.DEPOSIT, status=MovementStatus.APPROVED, note=''):
        return FundMovement.objects.create(
            member=member,
            kind=kind,
            amount=Decimal(amount),
            status=status,
            note=note,
            created_by=admin_account,
        )
    return _make


@pytest.fixture
def make_vehicle():
    def _make(member, price, vin=None):
        return Vehicle.objects.create(
            member=member,
            vin=vin or f'VIN{Vehicle.objects.count() + 1:06d}',
            model='Fabia',
            year=2016,
            purchase_price=Decimal(price),
        )
    return _make


@pytest.fixture
def pending_deposit(member, make_movement):
    return make_movement(member, '500.00', status=MovementStatus.PENDING)


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def member_client(member):
    return _client_for(member)


@pytest.fixture
def other_client(other_member):
    return _client_for(other_member)


@pytest.fixture
def admin_client(admin_account):
    return _client_for(admin_account)
