"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    ProfileNotFoundError,
    ProfileAlreadyExistsError,
    UsernameTakenError,
    InvalidProfileDataError,
)
from .user_registration import register_user
from .user_authentication import authenticate_subscriber
from .profile_management import (
    clean_flags,
    get_profile,
    complete_onboarding,
    update_profile,
    update_onboarding_details,
    get_onboarding_check,
)

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserRegistrationError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'ProfileNotFoundError',
    'ProfileAlreadyExistsError',
    'UsernameTakenError',
    'InvalidProfileDataError',
    # Services
    'register_user',
    'authenticate_subscriber',
    'clean_flags',
    'get_profile',
    'complete_onboarding',
    'update_profile',
    'update_onboarding_details',
    'get_onboarding_check',
]
