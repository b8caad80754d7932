"""
Stateless session tokens.

A session is a JWT, signed with ``JWT_SECRET``, that binds a user ID. Nothing
is stored server side: verifying a token is a signature check and nothing
more, so a token stays valid until its cookie expires or the secret rotates.
"""

import logging
from datetime import datetime
from typing import Optional

import jwt
from flask import current_app
from pytz import UTC

logger = logging.getLogger(__name__)

ALGORITHM = 'HS256'


def _secret(secret: Optional[str]) -> str:
    if secret is not None:
        return secret
    configured: str = current_app.config['JWT_SECRET']
    return configured


def generate_token(user_id: int, secret: Optional[str] = None) -> str:
    """Issue a signed session token for ``user_id``."""
    claims = {'user_id': user_id, 'iat': datetime.now(tz=UTC)}
    return jwt.encode(claims, _secret(secret), algorithm=ALGORITHM)


def verify_session(token: Optional[str],
                   secret: Optional[str] = None) -> Optional[int]:
    """
    Get the user ID bound to a session token.

    Returns ``None`` rather than raising if the token is absent, malformed,
    signed with another key, or does not carry a user ID. Callers should
    treat that as an anonymous request.
    """
    if not token:
        return None
    try:
        claims = jwt.decode(token, _secret(secret), algorithms=[ALGORITHM])
    except jwt.InvalidTokenError as e:
        logger.debug('Session token not valid: %s', e)
        return None
    user_id = claims.get('user_id')
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        logger.debug('Session token has no usable user_id')
        return None
    return user_id
