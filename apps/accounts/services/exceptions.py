"""Account service errors, rendered by DRF with their HTTP status."""
from rest_framework.exceptions import APIException


class AccountsServiceError(APIException):
    """Base exception for accounts services."""
    status_code = 400
    default_detail = 'Account request failed.'
    default_code = 'accounts_error'


class UserRegistrationError(AccountsServiceError):
    default_detail = 'Registration failed.'
    default_code = 'registration_failed'


class InvalidCredentialsError(AccountsServiceError):
    status_code = 401
    default_detail = 'Invalid email or password.'
    default_code = 'invalid_credentials'


class InactiveAccountError(AccountsServiceError):
    status_code = 403
    default_detail = 'Account is deactivated.'
    default_code = 'account_inactive'
