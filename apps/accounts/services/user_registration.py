"""Self-service registration of studio accounts."""

import logging

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from ..models import UserRole
from .exceptions import UserRegistrationError

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def register_user(*, email: str, password: str, display_name: str = "") -> User:
    """
    Register a new studio account.

    Accounts always start with the read-only ``user`` role; an admin promotes
    them from the Django admin.

    Raises:
        UserRegistrationError: If the email is taken (400)
    """
    email = User.objects.normalize_email(email.strip())
    if User.objects.filter(email__iexact=email).exists():
        raise UserRegistrationError("A user with this email already exists.")

    try:
        user = User.objects.create_user(
            email=email,
            password=password,
            display_name=display_name,
            role=UserRole.USER,
        )
    except IntegrityError:
        logger.exception("Registration failed for %s", email)
        raise UserRegistrationError("A user with this email already exists.")

    logger.info("User registered: %s", user.email)
    return user
