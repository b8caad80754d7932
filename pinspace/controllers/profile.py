"""Controllers for user profiles and the follow graph."""

import logging
from typing import Optional

from werkzeug.exceptions import BadRequest, NotFound, Unauthorized

from ..domain import Profile, User
from ..services import follows, users
from ..services.exceptions import ValidationError
from ..auth.decorators import NOT_AUTHENTICATED
from . import ResponseData
from .util import public_profile

logger = logging.getLogger(__name__)

NO_SUCH_USER = 'User not found'
SUCCESSFUL = {'message': 'Successful'}


def _load_user(username: str) -> User:
    user = users.get_user_by_username(username)
    if user is None:
        logger.debug('No such user: %s', username)
        raise NotFound(NO_SUCH_USER)
    return user


def get_profile(username: str, viewer_id: Optional[int]) -> ResponseData:
    """
    Render a user's profile for a viewer.

    Parameters
    ----------
    username : str
        The profile to show.
    viewer_id : int or None
        The authenticated user looking at the profile. ``None`` if anonymous.

    Returns
    -------
    dict
        Public details of the user, follower and following counts, and
        whether the viewer follows them.
    int
        An HTTP status code.
    dict
        Some extra headers to add to the response.

    """
    user = _load_user(username)
    is_following = False
    if viewer_id is not None:
        is_following = follows.is_following(viewer_id, user.user_id)
    profile = Profile(
        user=user,
        follower_count=follows.count_followers(user.user_id),
        following_count=follows.count_following(user.user_id),
        is_following=is_following
    )
    return public_profile(profile), 200, {}


def follow(viewer_id: int, username: str) -> ResponseData:
    """
    Follow or unfollow a user, depending on whether the viewer follows them.

    The response is the same either way.
    """
    if users.get_user_by_id(viewer_id) is None:
        logger.debug('Session for unknown user %s', viewer_id)
        raise Unauthorized(NOT_AUTHENTICATED)
    user = _load_user(username)
    try:
        now_following = follows.toggle(viewer_id, user.user_id)
    except ValidationError as e:
        raise BadRequest(str(e)) from e
    logger.debug('User %s %s %s', viewer_id,
                 'followed' if now_following else 'unfollowed', username)
    return dict(SUCCESSFUL), 200, {}
