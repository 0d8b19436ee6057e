"""Password reset service."""

import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction

from apps.accounts.mailer import UserMail
from apps.accounts.models import ResetPassword
from apps.accounts.utils import (
    create_crypto_string,
    create_date_add_days_from_now,
    create_hash,
)

from .exceptions import InvalidTokenError

User = get_user_model()
logger = logging.getLogger(__name__)


def request_password_reset(*, email: str) -> ResetPassword | None:
    """
    Issue a reset token for an active account and email it.

    Unknown or inactive addresses are ignored so callers can respond the
    same way in every case.

    Args:
        email: User's email address

    Returns:
        The ResetPassword record, or None if no active account matched
    """
    user = User.objects.get_by_email(email)
    if user is None or not user.is_active:
        logger.info(f"Password reset requested for unknown email {email}")
        return None

    with transaction.atomic():
        reset_password, _ = ResetPassword.objects.upsert_by_user_id(
            user_id=user.id,
            access_token=create_crypto_string(),
            expires_in=create_date_add_days_from_now(
                settings.RESET_PASSWORD_EXPIRES_IN_DAYS
            ),
        )
        UserMail().reset_password(
            email=user.email, access_token=reset_password.access_token
        )

    return reset_password


@transaction.atomic
def confirm_password_reset(*, access_token: str, new_password: str) -> User:
    """
    Reset user password with token.

    Args:
        access_token: Reset token
        new_password: New password

    Returns:
        User instance

    Raises:
        InvalidTokenError: If token is invalid or expired
    """
    reset_password = ResetPassword.objects.get_by_valid_access_token(access_token)
    if reset_password is None:
        raise InvalidTokenError("Invalid or expired reset token")

    user = reset_password.user
    User.objects.update_password_by_user_id(user.id, create_hash(new_password))
    ResetPassword.objects.delete_many_by_user_id(user.id)

    UserMail().successfully_reset_password(email=user.email)

    logger.info(f"Password reset completed for user {user.id}")
    return user
