import pytest
from datetime import timedelta
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, Verification, ResetPassword


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a test user."""
    return User.objects.create_user(
        email='testuser@example.com',
        password='TestPass123!',
        first_name='Test',
        last_name='User',
        email_verified=True,
    )


@pytest.fixture
def other_user(db):
    """Create and return another test user."""
    return User.objects.create_user(
        email='otheruser@example.com',
        password='OtherPass123!',
        first_name='Other',
        last_name='User',
        email_verified=True,
    )


@pytest.fixture
def user_inactive(db):
    """Create and return an inactive user."""
    return User.objects.create_user(
        email='inactive@example.com',
        password='TestPass123!',
        is_active=False,
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an authenticated API client using JWT."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def verification(user):
    """Pending verification of a new address for the test user."""
    return Verification.objects.create(
        user=user,
        email='verified-new@example.com',
        access_token='valid-verification-token',
        expires_in=timezone.now() + timedelta(days=1),
    )


@pytest.fixture
def expired_verification(user):
    return Verification.objects.create(
        user=user,
        email='expired@example.com',
        access_token='expired-verification-token',
        expires_in=timezone.now() - timedelta(minutes=1),
    )


@pytest.fixture
def reset_password(user):
    """Pending password reset for the test user."""
    return ResetPassword.objects.create(
        user=user,
        access_token='valid-reset-token-12345',
        expires_in=timezone.now() + timedelta(days=1),
    )


@pytest.fixture
def run_on_commit(django_capture_on_commit_callbacks):
    """
    Execute transaction.on_commit callbacks (emails) inside tests.

    Tests run inside a transaction that is never committed, so scheduled
    mail would otherwise never be sent.
    """
    return lambda: django_capture_on_commit_callbacks(execute=True)
