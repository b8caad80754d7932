"""Provides tools for working with authenticated user sessions."""

import logging
from typing import Optional

from flask import Flask, current_app, request

from ..services import sessions
from . import decorators

logger = logging.getLogger(__name__)


class Auth(object):
    """
    Attaches the authenticated user ID to the request.

    Intended for use in a Flask application factory, for example:

    .. code-block:: python

       from flask import Flask
       from pinspace.auth import Auth
       from pinspace.routes import ui


       def create_web_app() -> Flask:
          app = Flask('pinspace')
          app.config.from_pyfile('config.py')
          Auth(app)   # Registers the before_request auth check
          app.register_blueprint(ui.blueprint)
          return app

    Views then find the viewer's user ID, or ``None`` for an anonymous
    request, at ``request.auth``.
    """

    def __init__(self, app: Optional[Flask] = None) -> None:
        """
        Initialize ``app`` with `Auth`.

        Parameters
        ----------
        app : :class:`Flask`

        """
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        """
        Attach :meth:`.load_session` to the Flask app.

        Parameters
        ----------
        app : :class:`Flask`

        """
        self.app = app
        app.config.setdefault('AUTH_SESSION_COOKIE_NAME', 'token')
        app.before_request(self.load_session)

    def load_session(self) -> None:
        """
        Verify the session cookie, if any, and attach the user ID.

        An invalid token is not an error here. The request simply proceeds
        as anonymous, and views that need a user are guarded by
        :func:`.decorators.login_required`.
        """
        cookie_name = current_app.config['AUTH_SESSION_COOKIE_NAME']
        token = request.cookies.get(cookie_name)
        request.auth = sessions.verify_session(token)
        if token and request.auth is None:
            logger.debug('Ignoring invalid session cookie')
        return None
