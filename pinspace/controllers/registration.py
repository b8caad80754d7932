"""
Controller for account registration.

A successful registration logs the new user in straight away: the response
carries the same session cookie that :func:`.authentication.login` issues.
"""

import logging
from typing import Optional

from flask import current_app
from werkzeug.datastructures import FileStorage, MultiDict
from werkzeug.exceptions import BadRequest, InternalServerError
from wtforms import Form, PasswordField, StringField
from wtforms.validators import DataRequired, Optional as OptionalValue

from .. import domain
from ..services import sessions, uploads, users
from ..services.exceptions import ConflictError, ValidationError
from . import ResponseData, ALL_FIELDS_REQUIRED, SERVER_ERROR
from .util import public_user

logger = logging.getLogger(__name__)

CONFLICT_MESSAGES = {
    'email': 'Email is already in use.',
    'username': 'Username is already taken.'
}


def register(params: MultiDict,
             image: Optional[FileStorage] = None) -> ResponseData:
    """
    Create a new account, and log the user in.

    Parameters
    ----------
    params : MultiDict
        Should include `username`, `email` and `password`, and may include
        `displayName`.
    image : :class:`FileStorage` or None
        Optional profile image.

    Returns
    -------
    dict
        The new user's public details, plus a ``cookies`` entry for the
        route to apply to the response.
    int
        Status code. 201 if all goes well.
    dict
        Headers to add to the response.

    """
    form = RegistrationForm(params)
    if not form.validate():
        logger.debug('Registration form not valid: %s', list(form.errors))
        raise BadRequest(ALL_FIELDS_REQUIRED)

    profile_image: Optional[str] = None
    if image is not None and image.filename:
        try:
            profile_image = uploads.save_image(image)
        except ValidationError as e:
            raise BadRequest(str(e)) from e

    try:
        user = users.register(form.to_domain(profile_image),
                              form.password.data)
    except ConflictError as e:
        _discard(profile_image)
        raise BadRequest(CONFLICT_MESSAGES[e.field]) from e
    except ValidationError as e:
        _discard(profile_image)
        raise BadRequest(str(e)) from e
    except Exception as e:
        _discard(profile_image)
        logger.exception('Registration failed')
        raise InternalServerError(SERVER_ERROR) from e

    cookie = sessions.generate_token(user.user_id)
    data = public_user(user)
    data.update({
        'cookies': {
            'auth_session_cookie': (cookie,
                                    current_app.config['SESSION_DURATION'])
        }
    })
    return data, 201, {}


def _discard(profile_image: Optional[str]) -> None:
    if profile_image:
        uploads.delete_image(profile_image)


class RegistrationForm(Form):
    """User registration form."""

    username = StringField('Username', validators=[DataRequired()])
    displayName = StringField('Display name', validators=[OptionalValue()])
    email = StringField('Email address', validators=[DataRequired()])
    password = PasswordField('Password', validators=[DataRequired()])

    def to_domain(self, profile_image: Optional[str] = None) \
            -> domain.UserRegistration:
        """Generate a :class:`.UserRegistration` from this form's data."""
        return domain.UserRegistration(
            username=self.username.data,
            email=self.email.data,
            display_name=self.displayName.data or self.username.data,
            profile_image=profile_image
        )
