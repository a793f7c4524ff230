"""Tests for metadata utilities."""

import base64

import pytest

from server.apps.circles.exceptions import UnsupportedFileTypeError
from server.apps.circles.infrastructure.metadata import (
    build_file_key,
    classify_file_type,
    content_disposition,
    decode_file_data,
    get_file_extension,
)
from server.common.exceptions import BadRequestError


def test_classify_file_type():
    """Test media family from MIME prefix."""
    assert classify_file_type('video/mp4') == 'video'
    assert classify_file_type('audio/ogg') == 'audio'
    assert classify_file_type('image/png') == 'image'


@pytest.mark.parametrize('mime_type', [
    'application/pdf',
    'text/plain',
    'imagex/png',
    '',
])
def test_classify_file_type_unsupported(mime_type):
    """Test everything else is rejected."""
    with pytest.raises(UnsupportedFileTypeError) as exc_info:
        classify_file_type(mime_type)

    assert exc_info.value.code == 'BAD_REQUEST'
    assert exc_info.value.mime_type == mime_type


def test_get_file_extension():
    """Test extension is the text after the last dot."""
    assert get_file_extension('test.png') == 'png'
    assert get_file_extension('archive.tar.gz') == 'gz'
    assert get_file_extension('clip.MP4') == 'MP4'


def test_get_file_extension_fallback():
    """Test missing extension falls back to bin."""
    assert get_file_extension('README') == 'bin'
    assert get_file_extension('trailing.') == 'bin'


def test_build_file_key():
    """Test key layout and uniqueness."""
    key = build_file_key(7, 3, 'holiday.jpg')

    assert key.startswith('circles/7/3-')
    assert key.endswith('.jpg')
    assert build_file_key(7, 3, 'holiday.jpg') != key


def test_decode_file_data():
    """Test base64 decoding."""
    encoded = base64.b64encode(b'hello').decode()

    assert decode_file_data(encoded) == b'hello'


def test_decode_file_data_invalid():
    """Test invalid payload."""
    with pytest.raises(BadRequestError, match='Invalid file data'):
        decode_file_data('not base64!')


def test_content_disposition_ascii():
    """Test plain filename."""
    assert content_disposition('clip.mp4') == (
        "attachment; filename=\"clip.mp4\"; filename*=UTF-8''clip.mp4"
    )


def test_content_disposition_non_ascii():
    """Test UTF-8 filenames are percent-encoded."""
    header = content_disposition('假期 photo.png')

    assert 'filename="%E5%81%87%E6%9C%9F%20photo.png"' in header
    assert "filename*=UTF-8''%E5%81%87%E6%9C%9F%20photo.png" in header
