"""User registration service."""

from typing import Optional
from datetime import date

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from apps.accounts.models import UserRole
from .exceptions import UserRegistrationError

User = get_user_model()


@transaction.atomic
def register_user(
    *,
    email: str,
    password: str,
    display_name: str = "",
    phone: str = "",
    date_of_birth: Optional[date] = None
) -> User:
    """
    Register a new member account.

    Args:
        email: User's email address
        password: User's password (will be hashed)
        display_name: Optional display name
        phone: Optional phone number
        date_of_birth: Optional date of birth

    Returns:
        Created User instance with the member role

    Raises:
        UserRegistrationError: If the email is already taken
    """
    if User.objects.filter(email__iexact=email).exists():
        raise UserRegistrationError("A user with this email already exists")

    try:
        return User.objects.create_user(
            email=email,
            password=password,
            display_name=display_name,
            phone=phone,
            date_of_birth=date_of_birth,
            role=UserRole.MEMBER,
        )
    except IntegrityError:
        raise UserRegistrationError("A user with this email already exists")
