"""Database models for circles app."""

from pathlib import Path
from typing import ClassVar, Final, final

from typing_extensions import override

from django.conf import settings
from django.db import models
from django.utils import timezone

# Constants for field max lengths
_NAME_MAX_LENGTH: Final = 255
_INVITATION_CODE_MAX_LENGTH: Final = 64
_FILENAME_MAX_LENGTH: Final = 500
_FILE_KEY_MAX_LENGTH: Final = 500
_MIME_TYPE_MAX_LENGTH: Final = 100
_TOKEN_MAX_LENGTH: Final = 64
_CATEGORY_MAX_LENGTH: Final = 50
_CHOICE_MAX_LENGTH: Final = 32
_TARGET_TYPE_MAX_LENGTH: Final = 32
_PRICE_MAX_DIGITS: Final = 12
_PRICE_DECIMAL_PLACES: Final = 2


@final
class Circle(models.Model):
    """File sharing group.

    Public circles are discoverable and freely joinable. Private circles
    carry an invitation code and can only be joined with it.
    """

    name = models.CharField(max_length=_NAME_MAX_LENGTH)

    description = models.TextField(blank=True, null=True)

    creator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='created_circles',
        db_index=True,
    )

    is_public = models.BooleanField(default=True)

    invitation_code = models.CharField(
        max_length=_INVITATION_CODE_MAX_LENGTH,
        unique=True,
        blank=True,
        null=True,
        help_text='Set only for private circles',
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Circle'  # type: ignore[mutable-override]
        verbose_name_plural = 'Circles'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['-updated_at']

        constraints: ClassVar[list[models.BaseConstraint]] = [
            # Private circles always have a code, public ones never do
            models.CheckConstraint(
                condition=(
                    models.Q(is_public=True, invitation_code__isnull=True)
                    | models.Q(is_public=False, invitation_code__isnull=False)
                ),
                name='circles_invitation_code_iff_private',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return self.name


@final
class CircleMember(models.Model):
    """Membership of a user in a circle."""

    class Role(models.TextChoices):
        """Role inside a circle."""

        OWNER = 'owner', 'Owner'
        MEMBER = 'member', 'Member'

    circle = models.ForeignKey(
        Circle,
        on_delete=models.CASCADE,
        related_name='members',
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='memberships',
    )

    role = models.CharField(
        max_length=_CHOICE_MAX_LENGTH,
        choices=Role.choices,
        default=Role.MEMBER,
    )

    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Circle Member'  # type: ignore[mutable-override]
        verbose_name_plural = 'Circle Members'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['-joined_at']

        constraints: ClassVar[list[models.BaseConstraint]] = [
            models.UniqueConstraint(
                fields=['circle', 'user'],
                name='circle_members_unique_membership',
            ),
            # A circle has exactly one owner row
            models.UniqueConstraint(
                fields=['circle'],
                condition=models.Q(role='owner'),
                name='circle_members_single_owner',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.user}@{self.circle} ({self.role})'

    @property
    def is_owner(self) -> bool:
        """Whether this membership grants owner rights."""
        return self.role == self.Role.OWNER


@final
class Folder(models.Model):
    """Folder grouping files inside a circle."""

    circle = models.ForeignKey(
        Circle,
        on_delete=models.CASCADE,
        related_name='folders',
    )

    name = models.CharField(max_length=_NAME_MAX_LENGTH)

    description = models.TextField(blank=True, null=True)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='created_folders',
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Folder'  # type: ignore[mutable-override]
        verbose_name_plural = 'Folders'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['-created_at']

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.circle}:{self.name}'


@final
class File(models.Model):
    """Media file stored in S3-compatible storage.

    Only the storage key and URL are persisted; the bytes live in the
    bucket under ``circles/{circle_id}/{uploader_id}-{random}.{ext}``.
    Rows are immutable after upload except for deletion.
    """

    class FileType(models.TextChoices):
        """Media family derived from the MIME type prefix."""

        VIDEO = 'video', 'Video'
        AUDIO = 'audio', 'Audio'
        IMAGE = 'image', 'Image'

    circle = models.ForeignKey(
        Circle,
        on_delete=models.CASCADE,
        related_name='files',
    )

    # Folder deletion detaches files instead of deleting them
    folder = models.ForeignKey(
        Folder,
        on_delete=models.SET_NULL,
        related_name='files',
        blank=True,
        null=True,
    )

    uploader = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='uploaded_files',
    )

    filename = models.CharField(max_length=_FILENAME_MAX_LENGTH)

    file_key = models.CharField(
        max_length=_FILE_KEY_MAX_LENGTH,
        help_text='Object key in storage',
    )

    file_url = models.TextField(help_text='Public URL of the stored object')

    mime_type = models.CharField(max_length=_MIME_TYPE_MAX_LENGTH)

    file_size = models.BigIntegerField(
        help_text='File size in bytes as reported by the client',
    )

    file_type = models.CharField(
        max_length=_CHOICE_MAX_LENGTH,
        choices=FileType.choices,
        db_index=True,
    )

    # Marketplace
    is_paid = models.BooleanField(default=False)

    price = models.DecimalField(
        max_digits=_PRICE_MAX_DIGITS,
        decimal_places=_PRICE_DECIMAL_PLACES,
        blank=True,
        null=True,
    )

    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'File'  # type: ignore[mutable-override]
        verbose_name_plural = 'Files'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['-uploaded_at']

        indexes: ClassVar[list[models.Index]] = [
            # Optimize circle listing queries
            models.Index(
                fields=['circle', '-uploaded_at'],
                name='files_circle_recent_idx',
            ),
            models.Index(
                fields=['uploader', '-uploaded_at'],
                name='files_uploader_recent_idx',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.circle_id}:{self.filename}'

    def get_extension(self) -> str:
        """Extract file extension.

        Example: 'clip.MP4' -> 'mp4'

        Returns:
            Extension without dot (lowercase).
        """
        extension = Path(self.filename).suffix
        return extension.lstrip('.').lower()


@final
class FileShareLink(models.Model):
    """Token granting membership-bypassing access to a single file."""

    file = models.ForeignKey(
        File,
        on_delete=models.CASCADE,
        related_name='share_links',
    )

    token = models.CharField(
        max_length=_TOKEN_MAX_LENGTH,
        unique=True,
    )

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='share_links',
    )

    expires_at = models.DateTimeField(
        blank=True,
        null=True,
        db_index=True,
        help_text='Checked when the link is read; empty means never',
    )

    download_count = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'File Share Link'  # type: ignore[mutable-override]
        verbose_name_plural = 'File Share Links'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['-created_at']

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.file_id}:{self.token[:8]}'

    def is_expired(self) -> bool:
        """Check whether the link's expiry has passed.

        Returns:
            True if expired, False for open-ended or still valid links.
        """
        return self.expires_at is not None and self.expires_at < timezone.now()


@final
class CircleActivityLog(models.Model):
    """Append-only record of membership and content changes."""

    class Action(models.TextChoices):
        """Logged activity kinds."""

        MEMBER_JOINED = 'member_joined', 'Member joined'
        MEMBER_LEFT = 'member_left', 'Member left'
        MEMBER_REMOVED = 'member_removed', 'Member removed'
        FILE_UPLOADED = 'file_uploaded', 'File uploaded'
        FILE_DELETED = 'file_deleted', 'File deleted'
        FOLDER_CREATED = 'folder_created', 'Folder created'
        FOLDER_DELETED = 'folder_deleted', 'Folder deleted'
        CIRCLE_UPDATED = 'circle_updated', 'Circle updated'

    circle = models.ForeignKey(
        Circle,
        on_delete=models.CASCADE,
        related_name='activity',
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name='circle_activity',
        blank=True,
        null=True,
    )

    action = models.CharField(
        max_length=_CHOICE_MAX_LENGTH,
        choices=Action.choices,
    )

    target_id = models.BigIntegerField(blank=True, null=True)

    target_type = models.CharField(
        max_length=_TARGET_TYPE_MAX_LENGTH,
        blank=True,
        default='',
    )

    details = models.TextField(blank=True, default='')

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Circle Activity'  # type: ignore[mutable-override]
        verbose_name_plural = 'Circle Activity'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['-created_at', '-id']

        indexes: ClassVar[list[models.Index]] = [
            models.Index(
                fields=['circle', '-created_at'],
                name='activity_circle_recent_idx',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.circle_id}:{self.action}'


@final
class CircleCategory(models.Model):
    """Free-text discovery tag attached to a circle."""

    circle = models.ForeignKey(
        Circle,
        on_delete=models.CASCADE,
        related_name='categories',
    )

    category = models.CharField(
        max_length=_CATEGORY_MAX_LENGTH,
        db_index=True,
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Circle Category'  # type: ignore[mutable-override]
        verbose_name_plural = 'Circle Categories'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['category']

        constraints: ClassVar[list[models.BaseConstraint]] = [
            # Ensure category tags are unique per circle
            models.UniqueConstraint(
                fields=['circle', 'category'],
                name='circle_categories_unique',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.circle_id}:{self.category}'
