import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.vehicles.models import Vehicle, VehicleStatus, AdditionalExpense


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
def vehicle(member):
    return Vehicle.objects.create(
        member=member,
        vin='1HGCM82633A004352',
        make='Honda',
        model='Accord',
        year=2018,
        purchase_price=Decimal('10000.00'),
        purchase_date=date(2024, 1, 15),
    )


@pytest.fixture
def sold_vehicle(member):
    return Vehicle.objects.create(
        member=member,
        vin='WVWZZZ1JZXW000001',
        make='Volkswagen',
        model='Golf',
        year=2015,
        purchase_price=Decimal('6000.00'),
        status=VehicleStatus.SOLD,
    )


@pytest.fixture
def expense(vehicle):
    return AdditionalExpense.objects.create(
        vehicle=vehicle,
        member=vehicle.member,
        amount=Decimal('300.00'),
        description='New tyres',
    )


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
