"""Core domain concepts for user accounts and the social graph."""

from typing import NamedTuple, Optional
from datetime import datetime


class User(NamedTuple):
    """
    A pinspace account, as seen by the rest of the application.

    The password hash never leaves the datastore, so it has no place here.
    """

    username: str
    """Unique handle, used in profile URLs."""

    email: str
    """Unique email address, used to log in."""

    display_name: str
    """Name shown on the profile."""

    user_id: Optional[int] = None
    """Assigned by the datastore."""

    profile_image: Optional[str] = None
    """Filename of the profile image in the upload store, if any."""

    created: Optional[datetime] = None
    updated: Optional[datetime] = None


class UserRegistration(NamedTuple):
    """Details submitted when creating an account."""

    username: str
    email: str
    display_name: str
    profile_image: Optional[str] = None


class Profile(NamedTuple):
    """A user's profile as rendered for a particular viewer."""

    user: User

    follower_count: int
    """Number of accounts following :attr:`user`."""

    following_count: int
    """Number of accounts :attr:`user` follows."""

    is_following: bool = False
    """Whether the viewer follows :attr:`user`. Always False if anonymous."""
