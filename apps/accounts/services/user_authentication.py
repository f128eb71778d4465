"""Login for studio staff accounts."""

import logging

from django.contrib.auth import get_user_model
from django.contrib.auth.models import update_last_login
from django.db import transaction

from .exceptions import InvalidCredentialsError, InactiveAccountError

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def authenticate_user(*, email: str, password: str) -> User:
    """
    Check credentials and stamp ``last_login``.

    E-mail matching is case-insensitive. An unknown e-mail and a wrong
    password raise the same error.

    Raises:
        InvalidCredentialsError: If credentials are invalid (401)
        InactiveAccountError: If the account was deactivated (403)
    """
    user = (
        User.objects
        .select_for_update()
        .filter(email__iexact=email.strip())
        .first()
    )
    if user is None or not user.check_password(password):
        logger.warning("Failed login for %s", email)
        raise InvalidCredentialsError()

    if not user.is_active:
        logger.warning("Login attempt on deactivated account %s", user.email)
        raise InactiveAccountError()

    update_last_login(None, user)
    logger.info("User logged in: %s (%s)", user.email, user.role)
    return user
