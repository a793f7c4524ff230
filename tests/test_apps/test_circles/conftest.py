"""Shared fixtures for circles app tests."""

import pytest

from server.apps.circles.logic.circle_operations import create_circle


@pytest.fixture
def circles(repos):
    """Circle repository.

    Returns:
        CircleRepository bound to the test database.
    """
    return repos.circles


@pytest.fixture
def public_circle(circles, user):
    """Public circle owned by ``user``.

    Returns:
        Circle instance.
    """
    return create_circle(circles, user, 'Holiday Photos', 'Summer 2024')


@pytest.fixture
def private_circle(circles, user):
    """Private circle owned by ``user``.

    Returns:
        Circle instance with an invitation code.
    """
    return create_circle(circles, user, 'Family', is_public=False)
