"""Helpers for building an application against a throwaway database."""

from typing import Any

from flask import Flask

from ..factory import create_web_app
from ..services import datastore

SECRET = 'foosecret'


def create_test_app(upload_folder: str, **overrides: Any) -> Flask:
    """Create the app with an in-memory database and its tables."""
    config = {
        'TESTING': True,
        'JWT_SECRET': SECRET,
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'UPLOAD_FOLDER': upload_folder,
        'BCRYPT_ROUNDS': 4,
        'AUTH_SESSION_COOKIE_SECURE': False,
        'CLIENT_URL': None,
    }
    config.update(overrides)
    app = create_web_app(config)
    with app.app_context():
        datastore.create_all()
    return app
