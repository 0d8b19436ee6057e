"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    InactiveAccountError,
    InvalidTokenError,
    PasswordConfirmationError,
)
from .user_registration import register_user
from .user_authentication import authenticate_user
from .password_reset import request_password_reset, confirm_password_reset
from .email_verification import (
    issue_verification,
    request_email_verification,
    confirm_email_verification,
)
from .account_management import (
    update_profile,
    update_email,
    update_password,
    delete_user_account,
)

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'EmailAlreadyExistsError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'InvalidTokenError',
    'PasswordConfirmationError',
    # Services
    'register_user',
    'authenticate_user',
    'request_password_reset',
    'confirm_password_reset',
    'issue_verification',
    'request_email_verification',
    'confirm_email_verification',
    'update_profile',
    'update_email',
    'update_password',
    'delete_user_account',
]
