"""Database models for moderation app."""

from typing import ClassVar, Final, final

from typing_extensions import override

from django.conf import settings
from django.db import models

_TITLE_MAX_LENGTH: Final = 255
_ACTION_MAX_LENGTH: Final = 32


@final
class Announcement(models.Model):
    """Site-wide notice written by an admin.

    New announcements are drafts until explicitly published.
    """

    title = models.CharField(max_length=_TITLE_MAX_LENGTH)

    content = models.TextField()

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='announcements',
    )

    is_published = models.BooleanField(default=False, db_index=True)

    published_at = models.DateTimeField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Announcement'  # type: ignore[mutable-override]
        verbose_name_plural = 'Announcements'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['-created_at']

    @override
    def __str__(self) -> str:
        """String representation."""
        return self.title


@final
class AdminLog(models.Model):
    """Append-only audit record of an administrative mutation."""

    class Action(models.TextChoices):
        """Audited admin actions."""

        USER_DISABLED = 'user_disabled', 'User disabled'
        USER_ENABLED = 'user_enabled', 'User enabled'
        ANNOUNCEMENT_CREATED = 'announcement_created', 'Announcement created'
        ANNOUNCEMENT_UPDATED = 'announcement_updated', 'Announcement updated'
        ANNOUNCEMENT_PUBLISHED = 'announcement_published', 'Announcement published'
        ANNOUNCEMENT_DELETED = 'announcement_deleted', 'Announcement deleted'

    admin = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name='admin_actions',
        blank=True,
        null=True,
    )

    action = models.CharField(
        max_length=_ACTION_MAX_LENGTH,
        choices=Action.choices,
    )

    target_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name='+',
        blank=True,
        null=True,
    )

    details = models.TextField(blank=True, default='')

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Admin Log'  # type: ignore[mutable-override]
        verbose_name_plural = 'Admin Logs'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['-created_at', '-id']

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.admin_id}:{self.action}'
