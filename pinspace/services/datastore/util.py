"""Helpers and Flask application integration."""

import logging
from typing import Generator
from contextlib import contextmanager

from flask import Flask
from sqlalchemy.orm.session import Session

from .models import db

logger = logging.getLogger(__name__)


@contextmanager
def transaction() -> Generator[Session, None, None]:
    """Context manager for database transaction."""
    try:
        yield db.session
        db.session.commit()
    except Exception as e:
        logger.warning('Commit failed, rolling back: %s', str(e))
        db.session.rollback()
        raise


def init_app(app: Flask) -> None:
    """Set configuration defaults and attach session to the application."""
    app.config.setdefault('SQLALCHEMY_DATABASE_URI', 'sqlite://')
    db.init_app(app)


def create_all() -> None:
    """Create all tables in the database."""
    db.create_all()
