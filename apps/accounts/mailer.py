"""
Transactional emails for the account lifecycle.

Every message is scheduled with transaction.on_commit, so nothing is sent for
work that gets rolled back. Outside an atomic block the callback runs
immediately. Delivery failures are logged and never reach the caller.
"""

import logging
from functools import partial

from django.conf import settings
from django.core.mail import send_mail
from django.db import transaction

logger = logging.getLogger(__name__)


class UserMail:
    """Notifications sent to a user about changes to their account."""

    def __init__(self):
        self.site_name = settings.SITE_NAME
        self.frontend_url = settings.FRONTEND_URL.rstrip('/')

    def verification(self, *, email, access_token):
        verification_url = f'{self.frontend_url}/verification/{access_token}'
        self._schedule(
            email,
            subject=f'Verify your {self.site_name} email address',
            message=(
                f'Please confirm this email address by opening the link below:\n\n'
                f'{verification_url}\n\n'
                f'If you did not request this, you can ignore this email.'
            ),
        )

    def successfully_verified(self, *, email):
        self._schedule(
            email,
            subject='Email address verified',
            message=f'Your email address has been verified. Welcome to {self.site_name}!',
        )

    def successfully_updated_profile(self, *, email):
        self._schedule(
            email,
            subject='Profile updated',
            message='Your profile details have been updated.',
        )

    def successfully_updated_email(self, *, email):
        self._schedule(
            email,
            subject='Email address changed',
            message=(
                f'Your {self.site_name} account now uses this email address. '
                f'Please verify it using the link we sent separately.'
            ),
        )

    def successfully_updated_password(self, *, email):
        self._schedule(
            email,
            subject='Password changed',
            message=(
                'Your password has been changed. If this was not you, '
                'reset your password immediately.'
            ),
        )

    def successfully_deleted(self, *, email):
        self._schedule(
            email,
            subject='Account deleted',
            message=f'Your {self.site_name} account and all its data have been deleted.',
        )

    def reset_password(self, *, email, access_token):
        reset_url = f'{self.frontend_url}/reset-password/{access_token}'
        self._schedule(
            email,
            subject=f'Reset your {self.site_name} password',
            message=(
                f'Open the link below to choose a new password:\n\n'
                f'{reset_url}\n\n'
                f'If you did not request a reset, you can ignore this email.'
            ),
        )

    def successfully_reset_password(self, *, email):
        self._schedule(
            email,
            subject='Password reset',
            message='Your password has been reset.',
        )

    def _schedule(self, email, *, subject, message):
        transaction.on_commit(partial(self._deliver, email, subject, message))

    def _deliver(self, email, subject, message):
        try:
            send_mail(
                subject=subject,
                message=message,
                from_email=settings.DEFAULT_FROM_EMAIL,
                recipient_list=[email],
                fail_silently=False,
            )
        except Exception:
            logger.exception(f"Failed to send '{subject}' email to {email}")
            return False

        logger.info(f"Sent '{subject}' email to {email}")
        return True
