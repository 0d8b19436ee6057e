"""User registration service."""

import logging

from django.contrib.auth import get_user_model
from django.db import transaction

from apps.accounts.mailer import UserMail

from .email_verification import issue_verification
from .exceptions import EmailAlreadyExistsError

User = get_user_model()
logger = logging.getLogger(__name__)


def register_user(
    *,
    email: str,
    password: str,
    first_name: str = "",
    last_name: str = ""
) -> User:
    """
    Register a new user and start verification of their email.

    Args:
        email: User's email address
        password: User's password (will be hashed)
        first_name: Optional first name
        last_name: Optional last name

    Returns:
        Created User instance

    Raises:
        EmailAlreadyExistsError: If the email is already registered
    """
    if User.objects.is_exist_by_email(email):
        raise EmailAlreadyExistsError(f"Email {email} is already taken")

    with transaction.atomic():
        user = User.objects.create_user(
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
        )
        verification, _ = issue_verification(user_id=user.id, email=user.email)
        UserMail().verification(
            email=user.email, access_token=verification.access_token
        )

    logger.info(f"User {user.id} registered")
    return user
