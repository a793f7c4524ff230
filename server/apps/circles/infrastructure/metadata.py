"""Metadata helpers for uploaded circle media."""

import base64
import binascii
import secrets
from typing import Final
from urllib.parse import quote

from server.apps.circles.exceptions import UnsupportedFileTypeError
from server.apps.circles.models import File
from server.common.exceptions import BadRequestError

_FALLBACK_EXTENSION: Final = 'bin'
_KEY_RANDOM_BYTES: Final = 16  # 22 URL-safe chars

# MIME prefix -> stored file type; checked in order
_MIME_PREFIXES: Final = (
    ('video/', File.FileType.VIDEO),
    ('audio/', File.FileType.AUDIO),
    ('image/', File.FileType.IMAGE),
)


def classify_file_type(mime_type: str) -> str:
    """Derive the stored file type from a MIME type prefix.

    Args:
        mime_type: MIME type declared by the client (e.g., 'image/png').

    Returns:
        One of ``File.FileType`` values.

    Raises:
        UnsupportedFileTypeError: If the type is not video, audio or image.
    """
    for prefix, file_type in _MIME_PREFIXES:
        if mime_type.startswith(prefix):
            return file_type
    raise UnsupportedFileTypeError(mime_type)


def get_file_extension(filename: str) -> str:
    """Get the extension used in storage keys.

    Args:
        filename: Client filename (e.g., 'holiday.JPG').

    Returns:
        Text after the last dot, or 'bin' when there is none.
    """
    _, dot, extension = filename.rpartition('.')
    if not dot or not extension:
        return _FALLBACK_EXTENSION
    return extension


def build_file_key(circle_id: int, uploader_id: int, filename: str) -> str:
    """Synthesize a storage key for a new upload.

    Example: 'circles/7/3-Qh2x...Zk.png'

    Args:
        circle_id: Target circle ID.
        uploader_id: Uploading user ID.
        filename: Client filename, used for the extension only.

    Returns:
        Storage key unique per upload.
    """
    random_part = secrets.token_urlsafe(_KEY_RANDOM_BYTES)
    return 'circles/{circle_id}/{uploader_id}-{random_part}.{extension}'.format(
        circle_id=circle_id,
        uploader_id=uploader_id,
        random_part=random_part,
        extension=get_file_extension(filename),
    )


def decode_file_data(file_data: str) -> bytes:
    """Decode base64 upload payload.

    Args:
        file_data: Base64-encoded file bytes.

    Returns:
        Raw bytes.

    Raises:
        BadRequestError: If the payload is not valid base64.
    """
    try:
        return base64.b64decode(file_data, validate=True)
    except (binascii.Error, ValueError) as error:
        raise BadRequestError('Invalid file data') from error


def content_disposition(filename: str) -> str:
    """Build an attachment header carrying a UTF-8 filename.

    Args:
        filename: Original filename, possibly non-ASCII.

    Returns:
        Value for the Content-Disposition header.
    """
    encoded = quote(filename, safe='')
    return "attachment; filename=\"{0}\"; filename*=UTF-8''{0}".format(encoded)
