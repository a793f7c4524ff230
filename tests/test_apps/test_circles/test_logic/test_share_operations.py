"""Tests for share link operations."""

from datetime import UTC, datetime, timedelta

import pytest
from django.utils import timezone

from server.apps.circles.logic.circle_operations import join_circle
from server.apps.circles.logic.share_operations import (
    create_share_link,
    delete_share_link,
    find_expired_links,
    generate_share_token,
    register_download,
    resolve_share_link,
)
from server.apps.circles.models import File, FileShareLink
from server.common.exceptions import BadRequestError, ForbiddenError, NotFoundError


@pytest.fixture
def circle_file(public_circle, user):
    """File row in ``public_circle``; no stored object behind it.

    Returns:
        File instance.
    """
    return File.objects.create(
        circle=public_circle,
        uploader=user,
        filename='clip.mp4',
        file_key=f'circles/{public_circle.id}/{user.id}-abc.mp4',
        file_url='https://cdn.example.com/clip.mp4',
        mime_type='video/mp4',
        file_size=2048,
        file_type=File.FileType.VIDEO,
    )


def test_generate_share_token(settings):
    """Test token length and alphabet."""
    settings.CIRCLES_SHARE_TOKEN_LENGTH = 32

    token = generate_share_token()

    assert len(token) == 32
    assert all(char.isalnum() or char in '-_' for char in token)
    assert generate_share_token() != token


@pytest.mark.django_db
def test_create_link(circles, circle_file, user):
    """Test member creates open-ended link."""
    link = create_share_link(circles, user, circle_file.id)

    assert link.file == circle_file
    assert link.expires_at is None
    assert len(link.token) == 32


@pytest.mark.django_db
def test_create_link_naive_expiry_is_utc(circles, circle_file, user):
    """Test naive datetimes are taken as UTC."""
    link = create_share_link(
        circles,
        user,
        circle_file.id,
        datetime(2030, 1, 1, 12, 0),
    )

    assert link.expires_at == datetime(2030, 1, 1, 12, 0, tzinfo=UTC)


@pytest.mark.django_db
def test_create_link_non_member(circles, circle_file, other_user):
    """Test membership is required."""
    with pytest.raises(ForbiddenError):
        create_share_link(circles, other_user, circle_file.id)


@pytest.mark.django_db
def test_create_link_missing_file(circles, user):
    """Test unknown file."""
    with pytest.raises(NotFoundError, match='File not found'):
        create_share_link(circles, user, 99999)


@pytest.mark.django_db
def test_resolve_link(circles, circle_file, user):
    """Test valid token resolves to its file."""
    link = create_share_link(
        circles,
        user,
        circle_file.id,
        timezone.now() + timedelta(days=1),
    )

    resolved = resolve_share_link(circles, link.token)

    assert resolved.id == link.id
    assert resolved.file == circle_file


@pytest.mark.django_db
def test_resolve_unknown_token(circles):
    """Test unknown token."""
    with pytest.raises(NotFoundError, match='Share link not found'):
        resolve_share_link(circles, 'missing')


@pytest.mark.django_db
def test_resolve_expired_link(circles, circle_file, user):
    """Test expiry is checked at read time."""
    link = create_share_link(
        circles,
        user,
        circle_file.id,
        timezone.now() - timedelta(minutes=1),
    )

    with pytest.raises(BadRequestError, match='Share link has expired'):
        resolve_share_link(circles, link.token)


@pytest.mark.django_db
def test_register_download_counts(circles, circle_file, user):
    """Test downloads increment the counter."""
    link = create_share_link(circles, user, circle_file.id)

    register_download(circles, link.token)
    register_download(circles, link.token)

    link.refresh_from_db()
    assert link.download_count == 2


@pytest.mark.django_db
def test_delete_link_by_creator(circles, public_circle, circle_file, other_user):
    """Test link creator deletes own link."""
    join_circle(circles, other_user, public_circle.id)
    link = create_share_link(circles, other_user, circle_file.id)

    delete_share_link(circles, other_user, link.id)

    assert not FileShareLink.objects.filter(id=link.id).exists()


@pytest.mark.django_db
def test_delete_link_by_owner(circles, public_circle, circle_file, user, other_user):
    """Test circle owner deletes a member's link."""
    join_circle(circles, other_user, public_circle.id)
    link = create_share_link(circles, other_user, circle_file.id)

    delete_share_link(circles, user, link.id)

    assert not FileShareLink.objects.filter(id=link.id).exists()


@pytest.mark.django_db
def test_delete_link_forbidden(circles, public_circle, circle_file, user, other_user):
    """Test plain members cannot delete others' links."""
    join_circle(circles, other_user, public_circle.id)
    link = create_share_link(circles, user, circle_file.id)

    with pytest.raises(ForbiddenError, match='Only link creator or circle owner'):
        delete_share_link(circles, other_user, link.id)


@pytest.mark.django_db
def test_delete_missing_link(circles, user):
    """Test unknown link."""
    with pytest.raises(NotFoundError, match='Share link not found'):
        delete_share_link(circles, user, 99999)


@pytest.mark.django_db
def test_find_expired_links(circles, circle_file, user):
    """Test only links past their expiry are found."""
    now = timezone.now()
    expired = create_share_link(circles, user, circle_file.id, now - timedelta(days=1))
    create_share_link(circles, user, circle_file.id, now + timedelta(days=1))
    create_share_link(circles, user, circle_file.id)

    found = find_expired_links(circles, batch_size=10)

    assert [link.id for link in found] == [expired.id]
