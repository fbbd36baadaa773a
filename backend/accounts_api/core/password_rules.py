"""Password Rules: pure checks shared by the schema validator and the account service.

Invariants:
    - PASSWORD_MIN_LENGTH / PASSWORD_MAX_LENGTH are the single source of truth for bounds
    - Checks return a typed error (or None); they never raise and never log

Design Decisions:
    - Return-error style mirrors the other pure validators: the service decides when
      to raise, which keeps the short-circuit order visible in one place
"""

from accounts_api.core.errors import PasswordLengthError, PasswordMismatchError


PASSWORD_MIN_LENGTH: int = 6
PASSWORD_MAX_LENGTH: int = 32
NAME_MIN_LENGTH: int = 1
NAME_MAX_LENGTH: int = 100


def check_password_confirmation(
    password: str, confirmation: str,
) -> PasswordMismatchError | None:
    """Confirmation must equal the password exactly."""
    if password != confirmation:
        return PasswordMismatchError()
    return None


def check_password_length(password: str) -> PasswordLengthError | None:
    """Length must be within [PASSWORD_MIN_LENGTH, PASSWORD_MAX_LENGTH]."""
    if not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
        return PasswordLengthError(PASSWORD_MIN_LENGTH, PASSWORD_MAX_LENGTH)
    return None
