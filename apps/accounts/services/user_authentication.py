"""User authentication service."""

from django.contrib.auth import get_user_model
from django.contrib.auth.models import update_last_login

from .exceptions import InvalidCredentialsError, InactiveAccountError

User = get_user_model()


def authenticate_user(*, email: str, password: str) -> User:
    """
    Check email/password and record the login.

    Raises:
        InvalidCredentialsError: If no account matches or the password is wrong
        InactiveAccountError: If account is deactivated
    """
    user = User.objects.get_by_email(email)
    if user is None or not user.check_password(password):
        raise InvalidCredentialsError("Invalid email or password")

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    update_last_login(None, user)
    return user
