"""Email/password sign-in for subscribers."""

import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from .exceptions import InvalidCredentialsError, InactiveAccountError

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def authenticate_subscriber(*, email: str, password: str) -> User:
    """
    Check credentials and stamp ``last_login``.

    Email matching ignores case and surrounding whitespace. The same message
    is used for an unknown email and a wrong password.

    Raises:
        InvalidCredentialsError: Unknown email or wrong password
        InactiveAccountError: Correct credentials on a deactivated account
    """
    email = (email or '').strip()
    user = User.objects.select_for_update().filter(email__iexact=email).first()

    if user is None or not user.check_password(password):
        logger.info("Failed sign-in for %s", email)
        raise InvalidCredentialsError("Invalid email or password")

    if not user.is_active:
        raise InactiveAccountError("This account has been deactivated.")

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])
    return user
