"""Tests for circles models."""

from datetime import timedelta

import pytest
from django.db import IntegrityError
from django.utils import timezone

from server.apps.circles.models import Circle, File, FileShareLink


@pytest.mark.django_db
def test_private_circle_requires_code(user):
    """Test the database enforces code iff private."""
    with pytest.raises(IntegrityError):
        Circle.objects.create(name='Broken', creator=user, is_public=False)


@pytest.mark.django_db
def test_file_get_extension(public_circle, user):
    """Test extension helper lowercases."""
    file_instance = File(
        circle=public_circle,
        uploader=user,
        filename='Clip.MP4',
        file_type=File.FileType.VIDEO,
    )

    assert file_instance.get_extension() == 'mp4'


def test_share_link_is_expired():
    """Test expiry check at read time."""
    link = FileShareLink(expires_at=timezone.now() - timedelta(seconds=1))
    assert link.is_expired()

    link.expires_at = timezone.now() + timedelta(hours=1)
    assert not link.is_expired()

    link.expires_at = None
    assert not link.is_expired()
