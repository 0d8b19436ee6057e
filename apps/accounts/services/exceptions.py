"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class EmailAlreadyExistsError(AccountsServiceError):
    """Raised when an email address belongs to another account."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are invalid."""
    pass


class InactiveAccountError(AccountsServiceError):
    """Raised when account is deactivated."""
    pass


class InvalidTokenError(AccountsServiceError):
    """Raised when a verification/reset token is unknown or expired."""
    pass


class PasswordConfirmationError(AccountsServiceError):
    """Raised when the supplied password does not match the stored hash."""
    pass
