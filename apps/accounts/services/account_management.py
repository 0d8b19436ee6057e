"""Account management service."""

import logging

from django.contrib.auth import get_user_model
from django.db import transaction

from apps.accounts.mailer import UserMail
from apps.accounts.models import ResetPassword, Verification
from apps.accounts.utils import create_hash

from .email_verification import issue_verification
from .exceptions import EmailAlreadyExistsError, PasswordConfirmationError

User = get_user_model()
logger = logging.getLogger(__name__)


def _get_confirmed_user(*, email: str, password: str) -> User:
    """Load the account by email and check its password."""
    user = User.objects.get_by_email(email)
    if user is None or not user.check_password(password):
        raise PasswordConfirmationError("Invalid password")
    return user


def update_profile(*, user: User, first_name: str, last_name: str) -> dict:
    """
    Update name fields. Single-row write, no transaction.

    Returns:
        The updated fields
    """
    User.objects.update_profile_by_user_id(
        user.id, first_name=first_name, last_name=last_name
    )
    UserMail().successfully_updated_profile(email=user.email)

    return {'first_name': first_name, 'last_name': last_name}


def update_email(*, user: User, email: str, password: str) -> bool:
    """
    Move the account to a new email address and start its verification.

    Both notices go to the new address; the verification link must reach
    the mailbox whose ownership it confirms.

    Args:
        user: Authenticated user
        email: New address
        password: Current password for confirmation

    Returns:
        False if the address is unchanged (nothing done), True otherwise

    Raises:
        EmailAlreadyExistsError: If another account uses the address
        PasswordConfirmationError: If password is incorrect
    """
    if user.email == email:
        return False

    if User.objects.is_exist_by_email(email, exclude_user_id=user.id):
        raise EmailAlreadyExistsError(f"Email {email} is already taken")

    current_user = User.objects.get_by_id(user.id)
    if current_user is None or not current_user.check_password(password):
        raise PasswordConfirmationError("Invalid password")

    with transaction.atomic():
        User.objects.update_email_by_user_id(user.id, email)
        verification, _ = issue_verification(user_id=user.id, email=email)

        user_mail = UserMail()
        user_mail.successfully_updated_email(email=email)
        user_mail.verification(email=email, access_token=verification.access_token)

    logger.info(f"User {user.id} changed email to {email}")
    return True


def update_password(*, email: str, old_password: str, new_password: str) -> None:
    """
    Replace the password after checking the old one.

    Raises:
        PasswordConfirmationError: If the user is missing or old_password is wrong
    """
    user = _get_confirmed_user(email=email, password=old_password)

    User.objects.update_password_by_user_id(user.id, create_hash(new_password))
    UserMail().successfully_updated_password(email=user.email)

    logger.info(f"Password updated for user {user.id}")


def delete_user_account(*, email: str, password: str) -> None:
    """
    Permanently delete an account with its verification and reset records.

    All three deletions commit or roll back together.

    Raises:
        PasswordConfirmationError: If the user is missing or password is wrong
    """
    user = _get_confirmed_user(email=email, password=password)

    with transaction.atomic():
        ResetPassword.objects.delete_many_by_user_id(user.id)
        Verification.objects.delete_many_by_user_id(user.id)
        User.objects.delete_by_id(user.id)

        UserMail().successfully_deleted(email=user.email)

    logger.info(f"Account {user.id} deleted")
