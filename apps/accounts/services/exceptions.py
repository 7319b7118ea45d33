"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    code = 'accounts_error'


class UserRegistrationError(AccountsServiceError):
    """Raised when user registration fails."""
    code = 'registration_failed'


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are invalid."""
    code = 'invalid_credentials'


class InactiveAccountError(AccountsServiceError):
    """Raised when account is deactivated."""
    code = 'inactive_account'


class ProfileNotFoundError(AccountsServiceError):
    """Raised when the user has not completed onboarding yet."""
    code = 'profile_not_found'


class ProfileAlreadyExistsError(AccountsServiceError):
    """Raised when onboarding is submitted twice."""
    code = 'profile_exists'


class UsernameTakenError(AccountsServiceError):
    """Raised when the unique username constraint fires."""
    code = 'username_taken'


class InvalidProfileDataError(AccountsServiceError):
    """Raised when profile input fails a business rule."""
    code = 'invalid_profile_data'
