"""Django admin configuration for circles app."""

from typing import Final

from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest

from server.apps.circles.models import (
    Circle,
    CircleActivityLog,
    CircleCategory,
    CircleMember,
    File,
    FileShareLink,
    Folder,
)

_KIB: Final = 1024


def _format_bytes(size_bytes: int) -> str:
    """Format bytes in human-readable format.

    Args:
        size_bytes: Size in bytes.

    Returns:
        Formatted size string (e.g., '1.5 MB', '234 KB').
    """
    if size_bytes < _KIB:
        return f'{size_bytes} B'
    if size_bytes < _KIB ** 2:
        return f'{size_bytes / _KIB:.1f} KB'
    if size_bytes < _KIB ** 3:
        return f'{size_bytes / _KIB ** 2:.1f} MB'
    return f'{size_bytes / _KIB ** 3:.1f} GB'


class CircleMemberInline(admin.TabularInline):
    """Members listed on the circle page."""

    model = CircleMember
    extra = 0
    raw_id_fields = ['user']
    readonly_fields = ['joined_at']


class CircleCategoryInline(admin.TabularInline):
    """Category tags listed on the circle page."""

    model = CircleCategory
    extra = 0
    readonly_fields = ['created_at']


@admin.register(Circle)
class CircleAdmin(admin.ModelAdmin):
    """Admin interface for Circle model."""

    list_display = [
        'name',
        'creator',
        'is_public',
        'invitation_code',
        'created_at',
        'updated_at',
    ]

    list_filter = [
        'is_public',
        'created_at',
    ]

    search_fields = [
        'name',
        'invitation_code',
        'creator__name',
    ]

    readonly_fields = [
        'created_at',
        'updated_at',
    ]

    inlines = [CircleMemberInline, CircleCategoryInline]

    fieldsets = (
        ('Circle Information', {
            'fields': ('name', 'description', 'creator'),
        }),
        ('Access', {
            'fields': ('is_public', 'invitation_code'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
        }),
    )

    def get_queryset(self, request: HttpRequest) -> QuerySet[Circle]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related('creator')


@admin.register(File)
class FileAdmin(admin.ModelAdmin):
    """Admin interface for File model."""

    list_display = [
        'filename',
        'circle',
        'uploader',
        'file_type',
        'size_display',
        'is_paid',
        'price',
        'uploaded_at',
    ]

    list_filter = [
        'file_type',
        'is_paid',
        'uploaded_at',
    ]

    search_fields = [
        'filename',
        'file_key',
    ]

    readonly_fields = [
        'file_key',
        'file_url',
        'file_size',
        'mime_type',
        'file_type',
        'uploaded_at',
    ]

    fieldsets = (
        ('File Information', {
            'fields': ('filename', 'circle', 'folder', 'uploader'),
        }),
        ('Storage', {
            'fields': ('file_key', 'file_url'),
        }),
        ('Metadata', {
            'fields': ('file_size', 'mime_type', 'file_type'),
        }),
        ('Marketplace', {
            'fields': ('is_paid', 'price'),
        }),
        ('Timestamps', {
            'fields': ('uploaded_at',),
        }),
    )

    def size_display(self, obj: File) -> str:
        """Display file size in human-readable format.

        Args:
            obj: File instance.

        Returns:
            Formatted size string.
        """
        return _format_bytes(obj.file_size)
    size_display.short_description = 'Size'  # type: ignore[attr-defined]

    def get_queryset(self, request: HttpRequest) -> QuerySet[File]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related(
            'circle',
            'uploader',
        )


@admin.register(Folder)
class FolderAdmin(admin.ModelAdmin):
    """Admin interface for Folder model."""

    list_display = ['name', 'circle', 'created_by', 'file_count', 'created_at']
    search_fields = ['name']
    readonly_fields = ['created_at', 'updated_at']

    def file_count(self, obj: Folder) -> int:
        """Count of files in this folder.

        Args:
            obj: Folder instance.

        Returns:
            Number of files.
        """
        return obj.files.count()
    file_count.short_description = 'Files'  # type: ignore[attr-defined]


@admin.register(FileShareLink)
class FileShareLinkAdmin(admin.ModelAdmin):
    """Admin interface for FileShareLink model."""

    list_display = [
        'file',
        'created_by',
        'expires_at',
        'download_count',
        'created_at',
    ]
    list_filter = ['expires_at', 'created_at']
    readonly_fields = ['token', 'download_count', 'created_at']


@admin.register(CircleActivityLog)
class CircleActivityLogAdmin(admin.ModelAdmin):
    """Read-only view on circle activity."""

    list_display = ['circle', 'user', 'action', 'target_type', 'created_at']
    list_filter = ['action', 'created_at']

    def has_change_permission(
        self,
        request: HttpRequest,
        obj: CircleActivityLog | None = None,
    ) -> bool:
        """Activity is append-only."""
        return False
