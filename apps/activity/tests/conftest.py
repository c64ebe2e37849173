import pytest
from apps.accounts.models import User


@pytest.fixture
def user(db):
    return User.objects.create_user(
        email='member@example.com',
        password='TestPass123!',
        display_name='Member',
    )
