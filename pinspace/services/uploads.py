"""Local file store for profile images."""

import logging
import os
import uuid
from typing import Optional

from flask import current_app
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from .exceptions import ValidationError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp'}


def _extension(filename: str) -> str:
    if '.' not in filename:
        return ''
    return filename.rsplit('.', 1)[1].lower()


def save_image(image: FileStorage) -> str:
    """
    Store an uploaded image and return the filename it was stored under.

    The stored name is generated, so two uploads with the same original name
    do not collide.
    """
    extension = _extension(secure_filename(image.filename or ''))
    if extension not in ALLOWED_EXTENSIONS:
        raise ValidationError('Profile image must be a png, jpg, gif or '
                              'webp file.')
    folder = current_app.config['UPLOAD_FOLDER']
    os.makedirs(folder, exist_ok=True)
    filename = f'{uuid.uuid4().hex}.{extension}'
    image.save(os.path.join(folder, filename))
    logger.debug('Stored profile image as %s', filename)
    return filename


def delete_image(filename: str) -> None:
    """Remove a stored image. Missing files are ignored."""
    path = os.path.join(current_app.config['UPLOAD_FOLDER'], filename)
    try:
        os.remove(path)
    except FileNotFoundError:
        logger.debug('Image %s already gone', filename)


def image_url(filename: Optional[str]) -> Optional[str]:
    """Public URL for a stored image, or ``None``."""
    if not filename:
        return None
    prefix: str = current_app.config.get('UPLOAD_URL_PREFIX', '/uploads/')
    return f'{prefix.rstrip("/")}/{filename}'
