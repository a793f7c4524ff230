"""Tests for user identity operations."""

import pytest

from server.apps.accounts.logic.user_operations import upsert_user
from server.apps.accounts.models import User


@pytest.mark.django_db
def test_upsert_creates_user(repos):
    """Test a new identity creates a regular user."""
    user = upsert_user(
        repos.users,
        'open-abc',
        name='Alice',
        email='alice@example.com',
        login_method='github',
    )

    assert user.open_id == 'open-abc'
    assert user.name == 'Alice'
    assert user.role == User.Role.USER
    assert user.username == 'open-abc'
    assert User.objects.count() == 1


@pytest.mark.django_db
def test_upsert_updates_only_given_fields(repos):
    """Test fields passed as None keep their stored value."""
    upsert_user(repos.users, 'open-abc', name='Alice', email='a@example.com')

    user = upsert_user(repos.users, 'open-abc', name='Alice B.')

    assert user.name == 'Alice B.'
    assert user.email == 'a@example.com'
    assert User.objects.count() == 1


@pytest.mark.django_db
def test_upsert_promotes_owner_identity(repos, settings):
    """Test the configured owner identity becomes admin."""
    settings.OWNER_OPEN_ID = 'owner-id'

    user = upsert_user(repos.users, 'owner-id', name='Owner')

    assert user.role == User.Role.ADMIN
    assert user.is_admin


@pytest.mark.django_db
def test_upsert_explicit_role_wins(repos, settings):
    """Test an explicit role overrides owner promotion."""
    settings.OWNER_OPEN_ID = 'owner-id'

    user = upsert_user(repos.users, 'owner-id', role=User.Role.USER)

    assert user.role == User.Role.USER


@pytest.mark.django_db
def test_upsert_requires_open_id(repos):
    """Test empty identity is rejected."""
    with pytest.raises(ValueError, match='open_id'):
        upsert_user(repos.users, '')
