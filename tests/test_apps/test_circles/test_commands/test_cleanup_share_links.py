"""Tests for cleanup_share_links management command."""

from datetime import timedelta
from io import StringIO

import pytest
from django.core.management import call_command
from django.utils import timezone

from server.apps.circles.models import File, FileShareLink


@pytest.fixture
def circle_file(public_circle, user):
    """File row without a stored object.

    Returns:
        File instance.
    """
    return File.objects.create(
        circle=public_circle,
        uploader=user,
        filename='song.mp3',
        file_key='circles/1/1-song.mp3',
        file_url='https://cdn.example.com/song.mp3',
        mime_type='audio/mpeg',
        file_size=100,
        file_type=File.FileType.AUDIO,
    )


def _link(circle_file, user, token, expires_at):
    return FileShareLink.objects.create(
        file=circle_file,
        token=token,
        created_by=user,
        expires_at=expires_at,
    )


@pytest.mark.django_db
class TestCleanupShareLinksCommand:
    """Tests for cleanup_share_links management command."""

    def test_deletes_expired_links(self, circle_file, user):
        """Test expired links are removed, live ones kept."""
        now = timezone.now()
        expired = _link(circle_file, user, 'expired', now - timedelta(days=1))
        live = _link(circle_file, user, 'live', now + timedelta(days=1))
        forever = _link(circle_file, user, 'forever', None)

        out = StringIO()
        call_command('cleanup_share_links', stdout=out)

        assert not FileShareLink.objects.filter(id=expired.id).exists()
        assert FileShareLink.objects.filter(id=live.id).exists()
        assert FileShareLink.objects.filter(id=forever.id).exists()
        assert 'Purged 1 expired share links' in out.getvalue()

    def test_dry_run(self, circle_file, user):
        """Test dry run deletes nothing."""
        expired = _link(
            circle_file,
            user,
            'expired',
            timezone.now() - timedelta(days=1),
        )

        out = StringIO()
        call_command('cleanup_share_links', '--dry-run', stdout=out)

        assert FileShareLink.objects.filter(id=expired.id).exists()
        assert 'Would delete' in out.getvalue()
        assert 'Would purge 1 share links' in out.getvalue()

    def test_batch_size(self, circle_file, user):
        """Test at most batch-size links are processed."""
        past = timezone.now() - timedelta(days=1)
        for index in range(3):
            _link(circle_file, user, f'expired-{index}', past)

        call_command('cleanup_share_links', '--batch-size', '2', stdout=StringIO())

        assert FileShareLink.objects.count() == 1
