"""Helpers for :mod:`pinspace.controllers`."""

from typing import Any, Dict, Optional
from datetime import datetime

from ..domain import User, Profile
from ..services import uploads


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def public_user(user: User) -> Dict[str, Any]:
    """
    Render the fields of a :class:`.User` that are safe to expose.

    Field names follow the client's JSON conventions.
    """
    return {
        '_id': user.user_id,
        'username': user.username,
        'displayName': user.display_name,
        'email': user.email,
        'img': uploads.image_url(user.profile_image),
        'createdAt': _isoformat(user.created),
        'updatedAt': _isoformat(user.updated)
    }


def public_profile(profile: Profile) -> Dict[str, Any]:
    """Render a :class:`.Profile` for its viewer."""
    data = public_user(profile.user)
    data.update({
        'followerCount': profile.follower_count,
        'followingCount': profile.following_count,
        'isFollowing': profile.is_following
    })
    return data
