"""Integration with the follow-edge datastore."""

import logging

from sqlalchemy.exc import IntegrityError

from .datastore import transaction, DBFollow
from .exceptions import ValidationError

logger = logging.getLogger(__name__)


def count_followers(user_id: int) -> int:
    """Number of users following ``user_id``."""
    with transaction() as session:
        count: int = session.query(DBFollow) \
            .filter(DBFollow.following_id == user_id) \
            .count()
    return count


def count_following(user_id: int) -> int:
    """Number of users ``user_id`` follows."""
    with transaction() as session:
        count: int = session.query(DBFollow) \
            .filter(DBFollow.follower_id == user_id) \
            .count()
    return count


def is_following(follower_id: int, following_id: int) -> bool:
    """Determine whether the edge ``follower_id -> following_id`` exists."""
    with transaction() as session:
        return session.query(DBFollow.follower_id) \
            .filter(DBFollow.follower_id == follower_id) \
            .filter(DBFollow.following_id == following_id) \
            .first() is not None


def toggle(follower_id: int, following_id: int) -> bool:
    """
    Follow ``following_id`` if not already following it, otherwise unfollow.

    The delete and the insert each stand alone, so there is no window
    between reading the edge and acting on it. If a concurrent request
    inserts the same edge first, the primary key rejects ours and the edge
    is left in place.

    Returns
    -------
    bool
        True if ``follower_id`` follows ``following_id`` afterwards.

    Raises
    ------
    :class:`ValidationError`
        If a user tries to follow themselves.

    """
    if follower_id == following_id:
        raise ValidationError('You cannot follow yourself.')

    with transaction() as session:
        deleted = session.query(DBFollow) \
            .filter(DBFollow.follower_id == follower_id) \
            .filter(DBFollow.following_id == following_id) \
            .delete(synchronize_session=False)
    if deleted:
        logger.debug('User %s unfollowed %s', follower_id, following_id)
        return False

    try:
        with transaction() as session:
            session.add(DBFollow(follower_id=follower_id,
                                 following_id=following_id))
    except IntegrityError:
        logger.debug('Edge %s -> %s created concurrently',
                     follower_id, following_id)
        return True
    logger.debug('User %s followed %s', follower_id, following_id)
    return True
