"""SQLAlchemy models for database integration."""

from datetime import datetime
from pytz import UTC

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, \
    Integer, String

db: SQLAlchemy = SQLAlchemy()


def _now() -> datetime:
    return datetime.now(tz=UTC)


class DBUser(db.Model):
    """Persistence for :class:`pinspace.domain.User`."""

    __tablename__ = 'users'

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True)
    display_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    profile_image = Column(String(255), nullable=True)
    created = Column(DateTime, nullable=False, default=_now)
    updated = Column(DateTime, nullable=False, default=_now, onupdate=_now)


class DBFollow(db.Model):
    """
    A directed follow edge.

    The composite primary key allows at most one edge per ordered pair, and
    the check constraint rules out self-edges.
    """

    __tablename__ = 'follows'
    __table_args__ = (
        CheckConstraint('follower_id != following_id',
                        name='ck_follows_not_self'),
    )

    follower_id = Column(ForeignKey('users.user_id'), primary_key=True)
    following_id = Column(ForeignKey('users.user_id'), primary_key=True,
                          index=True)
    created = Column(DateTime, nullable=False, default=_now)
