"""Request controllers for the pinspace accounts application."""

from typing import Tuple

ResponseData = Tuple[dict, int, dict]
"""Response body, HTTP status code, and extra headers."""

ALL_FIELDS_REQUIRED = 'All fields are required!'
SERVER_ERROR = 'Server error. Please try again later.'
