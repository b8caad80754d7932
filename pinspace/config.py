"""Flask configuration."""
import os

#################### General config for app ####################
PINSPACE_ENV = os.environ.get('PINSPACE_ENV', 'development')
"""Deployment environment. ``production`` turns on secure cookies."""

CLIENT_URL = os.environ.get('CLIENT_URL')
"""Origin of the browser client.

If set, responses allow this origin to make credentialed cross-site
requests."""

LOGLEVEL = int(os.environ.get('LOGLEVEL', 20))
"""Log level for the ``pinspace`` loggers."""


#################### JWT session configs ####################
JWT_SECRET = os.environ.get('JWT_SECRET')
"""Secret used to sign session tokens.

There is no default. :func:`pinspace.factory.create_web_app` refuses to
start without it."""

AUTH_SESSION_COOKIE_NAME = os.environ.get('AUTH_SESSION_COOKIE_NAME', 'token')
AUTH_SESSION_COOKIE_SECURE = bool(int(os.environ.get(
    'AUTH_SESSION_COOKIE_SECURE',
    '1' if PINSPACE_ENV == 'production' else '0'
)))
"""Only send the session cookie over HTTPS.

Secure cookies are also marked ``SameSite=None`` so that the client can be
served from another site."""

SESSION_DURATION = int(os.environ.get('SESSION_DURATION', 30 * 24 * 60 * 60))
"""Lifetime of the session cookie, in seconds."""

BCRYPT_ROUNDS = int(os.environ.get('BCRYPT_ROUNDS', 10))
"""bcrypt cost factor used when hashing new passwords."""


#################### Datastore ####################
SQLALCHEMY_DATABASE_URI = os.environ.get('SQLALCHEMY_DATABASE_URI',
                                         'sqlite://')
SQLALCHEMY_TRACK_MODIFICATIONS = False

CREATE_DB = bool(int(os.environ.get('CREATE_DB', 0)))
"""Create the tables on startup."""


#################### Uploads ####################
UPLOAD_FOLDER = os.environ.get(
    'UPLOAD_FOLDER',
    os.path.join(os.getcwd(), 'uploads')
)
"""Directory where profile images are stored."""

UPLOAD_URL_PREFIX = os.environ.get('UPLOAD_URL_PREFIX', '/uploads/')
"""Public path prefix for stored profile images."""

MAX_CONTENT_LENGTH = int(os.environ.get('MAX_CONTENT_LENGTH',
                                        8 * 1024 * 1024))
"""Largest request body Flask will accept, in bytes."""
