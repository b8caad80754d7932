"""
Password hashing with bcrypt.

The cost factor is read from ``BCRYPT_ROUNDS`` in the application config, so
these functions need an application context.
"""

from functools import lru_cache

import bcrypt
from flask import current_app

from .exceptions import PasswordAuthenticationFailed, ValidationError

MAX_PASSWORD_BYTES = 72
"""bcrypt only looks at the first 72 bytes of a password."""


def _rounds() -> int:
    rounds: int = current_app.config['BCRYPT_ROUNDS']
    return rounds


@lru_cache(maxsize=None)
def _dummy_hash(rounds: int) -> bytes:
    return bcrypt.hashpw(b'dummy', bcrypt.gensalt(rounds=rounds))


def hash_password(password: str) -> str:
    """Generate a salted bcrypt hash of a password."""
    encoded = password.encode('utf-8')
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValidationError(
            f'Password must be at most {MAX_PASSWORD_BYTES} bytes long.'
        )
    hashed = bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=_rounds()))
    return hashed.decode('ascii')


def check_password(password: str, hashed: str) -> None:
    """
    Check a password against a stored bcrypt hash.

    Raises
    ------
    :class:`PasswordAuthenticationFailed`
        If the password does not match, or the stored hash is unusable.

    """
    encoded = password.encode('utf-8')
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise PasswordAuthenticationFailed('Password too long')
    try:
        matches = bcrypt.checkpw(encoded, hashed.encode('ascii'))
    except ValueError as e:
        raise PasswordAuthenticationFailed('Stored hash is malformed') from e
    if not matches:
        raise PasswordAuthenticationFailed('Incorrect password')


def check_dummy_password(password: str) -> None:
    """
    Spend the same effort as :func:`check_password`, against nothing.

    Called when there is no account to check against, so that an unknown
    email takes about as long to reject as a wrong password. The dummy hash
    uses the configured cost factor, as new passwords do.
    """
    bcrypt.checkpw(password.encode('utf-8')[:MAX_PASSWORD_BYTES],
                   _dummy_hash(_rounds()))
