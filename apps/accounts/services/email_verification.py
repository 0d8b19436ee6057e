"""Email verification service."""

import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction

from apps.accounts.mailer import UserMail
from apps.accounts.models import Verification
from apps.accounts.utils import (
    create_crypto_string,
    create_date_add_days_from_now,
    jwt_sign,
)

from .exceptions import EmailAlreadyExistsError, InvalidTokenError

User = get_user_model()
logger = logging.getLogger(__name__)


def issue_verification(*, user_id, email):
    """
    Create or refresh the verification record for (user, email).

    Must run inside the caller's transaction.

    Returns:
        Tuple of (Verification, created)
    """
    return Verification.objects.upsert_by_user_id_and_email(
        user_id=user_id,
        email=email,
        access_token=create_crypto_string(),
        expires_in=create_date_add_days_from_now(
            settings.VERIFICATION_EXPIRES_IN_DAYS
        ),
    )


def request_email_verification(*, user: User, email: str) -> Verification:
    """
    Start verification of an email address for the given user.

    The caller's own current address is never checked against itself.
    The link is mailed to the address being verified, not the account's
    current one, so following it proves ownership of the new mailbox.

    Args:
        user: Authenticated user
        email: Address to verify

    Returns:
        The created or refreshed Verification

    Raises:
        EmailAlreadyExistsError: If another account uses the address
    """
    if user.email != email and User.objects.is_exist_by_email(
        email, exclude_user_id=user.id
    ):
        raise EmailAlreadyExistsError(f"Email {email} is already taken")

    with transaction.atomic():
        verification, created = issue_verification(user_id=user.id, email=email)
        UserMail().verification(email=email, access_token=verification.access_token)

    logger.info(
        f"Verification {'created' if created else 'refreshed'} "
        f"for user {user.id} ({email})"
    )
    return verification


def confirm_email_verification(*, access_token: str) -> dict:
    """
    Consume a verification token.

    Marks the user's email as verified, switches it to the verified address
    and removes every verification record of the user so the token cannot be
    replayed.

    Args:
        access_token: Token from the verification email

    Returns:
        Signed session token, ``{'access_token': ...}``

    Raises:
        InvalidTokenError: If the token is unknown or expired
    """
    verification = Verification.objects.get_by_valid_access_token(access_token)
    if verification is None:
        raise InvalidTokenError("Invalid or expired verification token")

    user_id = verification.user_id
    email = verification.email

    with transaction.atomic():
        User.objects.update_verification_and_email_by_user_id(user_id, email)
        Verification.objects.delete_many_by_user_id(user_id)

        tokens = jwt_sign(User.objects.get(id=user_id))
        UserMail().successfully_verified(email=email)

    logger.info(f"Email {email} verified for user {user_id}")
    return tokens
