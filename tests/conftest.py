"""Shared fixtures for all tests."""

import base64

import boto3
import pytest
from django.contrib.auth import get_user_model
from moto import mock_aws

from server.apps.api.container import build_repositories

User = get_user_model()


@pytest.fixture
def user(db):
    """Create test user.

    Returns:
        User instance for testing.
    """
    return User.objects.create_user(
        username='testuser',
        password='testpass123',
        email='test@example.com',
        name='Test User',
    )


@pytest.fixture
def other_user(db):
    """Create second test user for isolation tests.

    Returns:
        Second user instance.
    """
    return User.objects.create_user(
        username='otheruser',
        password='testpass123',
        email='other@example.com',
        name='Other User',
    )


@pytest.fixture
def admin_user(db):
    """Create user with the admin role.

    Returns:
        Admin user instance.
    """
    return User.objects.create_user(
        username='adminuser',
        password='testpass123',
        email='admin@example.com',
        name='Admin',
        role=User.Role.ADMIN,
    )


@pytest.fixture
def repos(db):
    """Repositories on the test database.

    Returns:
        Repositories container.
    """
    return build_repositories()


@pytest.fixture
def mock_s3():
    """Mock S3 service with circles bucket.

    Yields:
        boto3 S3 resource with circles bucket created.
    """
    with mock_aws():
        conn = boto3.resource('s3', region_name='us-east-1')
        conn.create_bucket(Bucket='circles')
        yield conn


@pytest.fixture
def png_data():
    """Base64 payload of a tiny PNG-like blob.

    Returns:
        Base64 string.
    """
    return base64.b64encode(b'\x89PNG\r\n\x1a\nfake image bytes').decode()
