"""Shared fixtures for api app tests."""

import pytest

from server.apps.circles.logic.circle_operations import create_circle
from server.apps.circles.models import File


@pytest.fixture
def circle(repos, user):
    """Public circle owned by ``user``.

    Returns:
        Circle instance.
    """
    return create_circle(repos.circles, user, 'Holiday Photos')


@pytest.fixture
def private_circle(repos, user):
    """Private circle owned by ``user``.

    Returns:
        Circle instance with an invitation code.
    """
    return create_circle(repos.circles, user, 'Family', is_public=False)


@pytest.fixture
def stored_file(circle, user):
    """File row pointing at an external URL.

    Returns:
        File instance.
    """
    return File.objects.create(
        circle=circle,
        uploader=user,
        filename='holiday photo.png',
        file_key=f'circles/{circle.id}/{user.id}-abc.png',
        file_url='https://cdn.example.com/circles/abc.png',
        mime_type='image/png',
        file_size=1024,
        file_type=File.FileType.IMAGE,
    )
