"""Provides Flask integration for the external JSON interface."""

import logging
from typing import Dict, Optional, Tuple
from datetime import timedelta

from flask import Blueprint, Response, current_app, jsonify, \
    make_response, request, send_from_directory
from werkzeug.datastructures import MultiDict

from ..auth.decorators import login_required
from ..controllers import authentication, profile, registration

logger = logging.getLogger(__name__)
blueprint = Blueprint('ui', __name__, url_prefix='/users')
uploads = Blueprint('uploads', __name__)

Cookies = Dict[str, Tuple[str, int]]


def set_cookies(response: Response, cookies: Optional[Cookies]) -> None:
    """
    Update a :class:`.Response` with cookies in controller data.

    Controllers seeking to update cookies include a 'cookies' key in their
    response data, mapping a config prefix to a value and a max age.
    """
    if not cookies:
        return None
    for cookie_key, (cookie_value, expires) in cookies.items():
        cookie_name = current_app.config[f'{cookie_key.upper()}_NAME']
        max_age = timedelta(seconds=expires)
        params = dict(httponly=True, samesite='Lax')
        if current_app.config['AUTH_SESSION_COOKIE_SECURE']:
            # The client runs on another site.
            params.update({'secure': True, 'samesite': 'None'})
        response.set_cookie(cookie_name, cookie_value, max_age=max_age,
                            **params)
    return None


def _request_params() -> MultiDict:
    """Request body as form data, whether it was sent as JSON or a form."""
    if request.is_json:
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return MultiDict()
        return MultiDict({key: value for key, value in payload.items()
                          if isinstance(value, str)})
    return request.form


def _respond(data: dict, code: int, headers: dict) -> Response:
    cookies = data.pop('cookies', None)
    response = make_response(jsonify(data), code, headers)
    set_cookies(response, cookies)
    return response


@blueprint.route('/register', methods=['POST'])
def register() -> Response:
    """Create a new account."""
    data, code, headers = registration.register(_request_params(),
                                                request.files.get('img'))
    return _respond(data, code, headers)


@blueprint.route('/login', methods=['POST'])
def login() -> Response:
    """User can log in with email and password."""
    data, code, headers = authentication.login(_request_params())
    return _respond(data, code, headers)


@blueprint.route('/logout', methods=['POST'])
def logout() -> Response:
    """Clear the session cookie."""
    data, code, headers = authentication.logout()
    return _respond(data, code, headers)


@blueprint.route('/<string:username>', methods=['GET'])
def get_user(username: str) -> Response:
    """Show a user's profile to whoever is asking."""
    data, code, headers = profile.get_profile(username, request.auth)
    return _respond(data, code, headers)


@blueprint.route('/<string:username>/follow', methods=['POST'])
@login_required
def follow(username: str) -> Response:
    """Follow the user, or unfollow them if already following."""
    data, code, headers = profile.follow(request.auth, username)
    return _respond(data, code, headers)


@uploads.route('/uploads/<path:filename>', methods=['GET'])
def uploaded_file(filename: str) -> Response:
    """Serve a stored profile image."""
    return send_from_directory(current_app.config['UPLOAD_FOLDER'], filename)


@uploads.route('/auth_status', methods=['GET'])
def auth_status() -> Response:
    """Get if the app is running."""
    return make_response("OK")
