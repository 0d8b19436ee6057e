"""Token, date and hashing helpers used by the accounts services."""

from datetime import datetime, timedelta
import secrets

from django.contrib.auth.hashers import make_password
from django.utils import timezone
from rest_framework_simplejwt.tokens import AccessToken


def create_crypto_string() -> str:
    """Return a URL-safe random token for verification and reset links."""
    return secrets.token_urlsafe(32)


def create_date_add_days_from_now(days: int) -> datetime:
    return timezone.now() + timedelta(days=days)


def create_hash(plaintext: str) -> str:
    """Hash a password with the configured PASSWORD_HASHERS."""
    return make_password(plaintext)


def jwt_sign(user) -> dict:
    """Issue a signed access token for the given user."""
    return {'access_token': str(AccessToken.for_user(user))}
