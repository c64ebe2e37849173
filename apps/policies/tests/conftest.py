import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.policies.models import AppSetting


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
def admin_account(db):
    return User.objects.create_admin(
        email='admin@example.com',
        password='AdminPass123!',
        display_name='Admin',
    )


@pytest.fixture
def fee_setting(db, settings):
    return AppSetting.objects.create(
        key=settings.FRANCHISE_FEE_SETTING_KEY,
        value='10',
        description='Franchise fee percentage',
    )


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def admin_client(admin_account):
    return _client_for(admin_account)


@pytest.fixture
def member_client(member):
    return _client_for(member)
