"""Tests for the circle media storage backend."""

import pytest
from botocore.exceptions import ClientError

from server.apps.circles.infrastructure.storage import FileStorage

_KEY = 'circles/1/1-abc.png'


@pytest.fixture
def storage(mock_s3):
    """Storage bound to the mocked bucket.

    Returns:
        FileStorage instance.
    """
    return FileStorage(
        bucket_name='circles',
        region_name='us-east-1',
        querystring_auth=False,
    )


def test_save_media(storage, mock_s3):
    """Test bytes and content type are written under the key."""
    saved_key, url = storage.save_media(_KEY, b'png bytes', 'image/png')

    assert saved_key == _KEY
    assert url.endswith(_KEY)
    stored = mock_s3.Object('circles', _KEY).get()
    assert stored['Body'].read() == b'png bytes'
    assert stored['ContentType'] == 'image/png'


def test_discard(storage):
    """Test discard reports whether an object was removed."""
    storage.save_media(_KEY, b'png bytes', 'image/png')

    assert storage.discard(_KEY)
    assert not storage.exists(_KEY)
    assert not storage.discard(_KEY)


def test_rollback_upload_swallows_errors(storage, monkeypatch):
    """Test failed rollbacks do not mask the original error."""
    def broken_delete(name):
        raise ClientError({'Error': {'Code': '500'}}, 'DeleteObject')

    monkeypatch.setattr(storage, 'delete', broken_delete)

    storage.rollback_upload(_KEY)
