"""Integration with the users datastore. Provides registration and authentication."""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

from ..domain import User, UserRegistration
from . import passwords
from .datastore import transaction, DBUser
from .exceptions import AuthenticationFailed, ConflictError, NoSuchUser, \
    PasswordAuthenticationFailed

logger = logging.getLogger(__name__)


def _to_domain(db_user: DBUser) -> User:
    return User(
        user_id=db_user.user_id,
        username=db_user.username,
        email=db_user.email,
        display_name=db_user.display_name,
        profile_image=db_user.profile_image,
        created=db_user.created,
        updated=db_user.updated
    )


def get_user_by_id(user_id: int) -> Optional[User]:
    """Load a :class:`.User` by ID, or ``None`` if there is no such user."""
    with transaction() as session:
        db_user: Optional[DBUser] = session.get(DBUser, user_id)
        return _to_domain(db_user) if db_user else None


def get_user_by_username(username: str) -> Optional[User]:
    """Load a :class:`.User` by username, or ``None``."""
    with transaction() as session:
        db_user: Optional[DBUser] = session.query(DBUser) \
            .filter(DBUser.username == username) \
            .first()
        return _to_domain(db_user) if db_user else None


def does_email_exist(email: str) -> bool:
    """Determine whether an account is registered with ``email``."""
    with transaction() as session:
        return session.query(DBUser.user_id) \
            .filter(DBUser.email == email) \
            .first() is not None


def does_username_exist(username: str) -> bool:
    """Determine whether ``username`` is taken."""
    with transaction() as session:
        return session.query(DBUser.user_id) \
            .filter(DBUser.username == username) \
            .first() is not None


def register(registration: UserRegistration, password: str) -> User:
    """
    Add a new user to the database.

    The email and username are checked up front so that the caller gets a
    useful message, but the unique indexes on the users table are what
    actually guarantee that only one of two racing registrations survives.

    Raises
    ------
    :class:`ConflictError`
        If the email or username is already registered.

    """
    if does_email_exist(registration.email):
        logger.debug('Registration rejected, email in use')
        raise ConflictError('email')
    if does_username_exist(registration.username):
        logger.debug('Registration rejected, username %s taken',
                     registration.username)
        raise ConflictError('username')

    db_user = DBUser(
        username=registration.username,
        email=registration.email,
        display_name=registration.display_name,
        password_hash=passwords.hash_password(password),
        profile_image=registration.profile_image
    )
    try:
        with transaction() as session:
            session.add(db_user)
    except IntegrityError as e:
        # Lost a race with a concurrent registration.
        if does_email_exist(registration.email):
            raise ConflictError('email') from e
        if does_username_exist(registration.username):
            raise ConflictError('username') from e
        raise
    logger.info('Registered user %s', db_user.user_id)
    return _to_domain(db_user)


def authenticate(email: str, password: str) -> User:
    """
    Validate email/password. If successful, retrieve user details.

    An unknown email and a wrong password fail in the same way, so that the
    response does not reveal which accounts exist.

    Raises
    ------
    :class:`AuthenticationFailed`
        Failed to authenticate user with provided credentials.

    """
    try:
        db_user = _get_user_by_email(email)
    except NoSuchUser as e:
        logger.debug('No such user')
        passwords.check_dummy_password(password)
        raise AuthenticationFailed('Invalid email or password') from e
    try:
        passwords.check_password(password, db_user.password_hash)
    except PasswordAuthenticationFailed as e:
        logger.debug('Password check failed for user %s', db_user.user_id)
        raise AuthenticationFailed('Invalid email or password') from e
    return _to_domain(db_user)


def _get_user_by_email(email: str) -> DBUser:
    with transaction() as session:
        db_user: Optional[DBUser] = session.query(DBUser) \
            .filter(DBUser.email == email) \
            .first()
    if db_user is None:
        raise NoSuchUser('User does not exist')
    return db_user
