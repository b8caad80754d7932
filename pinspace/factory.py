"""Application factory for the accounts app."""

import logging
from typing import Any, Mapping, Optional

from flask import Flask, Response, current_app, jsonify
from werkzeug.exceptions import HTTPException, BadRequest, Unauthorized, \
    NotFound, MethodNotAllowed, RequestEntityTooLarge, InternalServerError

from . import auth
from .controllers import SERVER_ERROR
from .routes import ui
from .services import datastore

logger = logging.getLogger(__name__)


def create_web_app(config: Optional[Mapping[str, Any]] = None) -> Flask:
    """
    Initialize and configure the accounts application.

    Parameters
    ----------
    config : mapping
        Overrides applied on top of :mod:`pinspace.config`, mostly for tests.

    Raises
    ------
    RuntimeError
        If ``JWT_SECRET`` is not configured. Without it no session could be
        issued or verified, so the app refuses to start.

    """
    app = Flask('pinspace')
    app.config.from_pyfile('config.py')
    if config:
        app.config.update(config)

    if not app.config.get('JWT_SECRET'):
        raise RuntimeError('JWT_SECRET must be set')

    logging.getLogger('pinspace').setLevel(app.config['LOGLEVEL'])

    datastore.init_app(app)
    auth.Auth(app)    # Attaches the viewer to request.auth.
    app.register_blueprint(ui.blueprint)
    app.register_blueprint(ui.uploads)
    app.after_request(apply_cors_headers)

    if app.config['CREATE_DB']:
        with app.app_context():
            datastore.create_all()

    register_error_handlers(app)
    return app


def apply_cors_headers(response: Response) -> Response:
    """Allow the configured client origin to make credentialed requests."""
    client_url = current_app.config.get('CLIENT_URL')
    if client_url:
        response.headers['Access-Control-Allow-Origin'] = client_url
        response.headers['Access-Control-Allow-Credentials'] = 'true'
        response.headers['Access-Control-Allow-Headers'] = 'Content-Type'
        response.headers['Access-Control-Allow-Methods'] = \
            'GET, POST, OPTIONS'
        response.vary.add('Origin')
    return response


def register_error_handlers(app: Flask) -> None:
    """Register error handlers for the Flask app."""
    app.errorhandler(Unauthorized)(jsonify_exception)
    app.errorhandler(BadRequest)(jsonify_exception)
    app.errorhandler(NotFound)(jsonify_exception)
    app.errorhandler(MethodNotAllowed)(jsonify_exception)
    app.errorhandler(RequestEntityTooLarge)(jsonify_exception)
    app.errorhandler(InternalServerError)(jsonify_server_error)


def jsonify_exception(error: HTTPException) -> Response:
    """Render exceptions as JSON."""
    exc_resp = error.get_response()
    response: Response = jsonify(message=error.description)
    response.status_code = exc_resp.status_code
    return response


def jsonify_server_error(error: InternalServerError) -> Response:
    """Render a 500 without leaking any detail of what went wrong."""
    if error.original_exception is not None:
        logger.error('Unhandled exception: %s', error.original_exception,
                     exc_info=error.original_exception)
    response: Response = jsonify(message=SERVER_ERROR)
    response.status_code = 500
    return response
