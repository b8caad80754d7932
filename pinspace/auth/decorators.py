"""Guards for routes that need an authenticated user."""

from typing import Any, Callable
from functools import wraps

from flask import request
from werkzeug.exceptions import Unauthorized

NOT_AUTHENTICATED = 'Not authenticated!'


def login_required(view: Callable) -> Callable:
    """Reject requests that do not carry a valid session."""
    @wraps(view)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        if getattr(request, 'auth', None) is None:
            raise Unauthorized(NOT_AUTHENTICATED)
        return view(*args, **kwargs)
    return wrapper
