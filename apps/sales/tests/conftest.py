import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.policies.models import AppSetting
from apps.vehicles.models import Vehicle, AdditionalExpense


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
def fee_setting(db, settings):
    """Franchise fee of 10%."""
    return AppSetting.objects.create(
        key=settings.FRANCHISE_FEE_SETTING_KEY,
        value='10',
    )


@pytest.fixture
def vehicle(member):
    return Vehicle.objects.create(
        member=member,
        vin='JTDBR32E720012345',
        make='Toyota',
        model='Corolla',
        year=2019,
        purchase_price=Decimal('10000.00'),
        purchase_date=date(2024, 3, 1),
    )


@pytest.fixture
def vehicle_with_expenses(vehicle):
    AdditionalExpense.objects.create(
        vehicle=vehicle,
        member=vehicle.member,
        amount=Decimal('300.00'),
        description='Detailing',
    )
    AdditionalExpense.objects.create(
        vehicle=vehicle,
        member=vehicle.member,
        amount=Decimal('200.00'),
        description='Inspection',
    )
    return vehicle


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
