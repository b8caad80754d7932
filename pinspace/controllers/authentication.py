"""
Controllers for logging in and out.

When a user logs in they are issued a signed session token, which the route
sets as an HTTP-only cookie. Subsequent requests are authenticated by
checking the token's signature; see :mod:`pinspace.services.sessions`.
"""

import logging
from typing import Any, Dict

from flask import current_app
from werkzeug.datastructures import MultiDict
from werkzeug.exceptions import BadRequest, InternalServerError, Unauthorized
from wtforms import Form, PasswordField, StringField
from wtforms.validators import DataRequired

from ..services import sessions, users
from ..services.exceptions import AuthenticationFailed
from . import ResponseData, ALL_FIELDS_REQUIRED, SERVER_ERROR
from .util import public_user

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = 'Invalid email or password'


def login(params: MultiDict) -> ResponseData:
    """
    Authenticate a user with their email and password.

    Parameters
    ----------
    params : MultiDict
        Should include `email` and `password`.

    Returns
    -------
    dict
        The user's public details, plus a ``cookies`` entry for the route to
        apply to the response.
    int
        Status code. This should be 200 if all goes well.
    dict
        Headers to add to the response.

    """
    form = LoginForm(params)
    if not form.validate():
        logger.debug('Login form not valid')
        raise BadRequest(ALL_FIELDS_REQUIRED)

    try:
        user = users.authenticate(form.email.data, form.password.data)
    except AuthenticationFailed as e:
        logger.debug('Authentication failed: %s', e)
        raise Unauthorized(INVALID_CREDENTIALS) from e
    except Exception as e:
        logger.exception('Error during authentication')
        raise InternalServerError(SERVER_ERROR) from e

    cookie = sessions.generate_token(user.user_id)
    logger.debug('Issued session for user %s', user.user_id)
    data = public_user(user)
    data.update({
        'cookies': {
            'auth_session_cookie': (cookie,
                                    current_app.config['SESSION_DURATION'])
        }
    })
    return data, 200, {}


def logout() -> ResponseData:
    """
    Log the user out.

    Sessions are not stored, so there is nothing to invalidate; clearing the
    cookie is the whole job, and it succeeds whether or not there was one.
    """
    logger.debug('Request to log out')
    data: Dict[str, Any] = {
        'message': 'Logout successful',
        'cookies': {
            'auth_session_cookie': ('', 0)
        }
    }
    return data, 200, {}


class LoginForm(Form):
    """Log in form."""

    email = StringField('Email', validators=[DataRequired()])
    password = PasswordField('Password', validators=[DataRequired()])
