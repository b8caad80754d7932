"""Exceptions raised by the accounts services."""


class ValidationError(ValueError):
    """Input was missing or not acceptable."""


class ConflictError(RuntimeError):
    """An account with the same username or email already exists."""

    def __init__(self, field: str) -> None:
        """Record which unique field collided."""
        self.field = field
        super(ConflictError, self).__init__(f'{field} is already in use')


class NoSuchUser(RuntimeError):
    """User does not exist."""


class AuthenticationFailed(RuntimeError):
    """Failed to authenticate user with provided credentials."""


class PasswordAuthenticationFailed(RuntimeError):
    """Password is not correct."""
