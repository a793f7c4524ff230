"""Django admin configuration for moderation app."""

from django.contrib import admin
from django.http import HttpRequest

from server.apps.moderation.models import AdminLog, Announcement


@admin.register(Announcement)
class AnnouncementAdmin(admin.ModelAdmin):
    """Admin interface for Announcement model."""

    list_display = [
        'title',
        'created_by',
        'is_published',
        'published_at',
        'created_at',
    ]

    list_filter = [
        'is_published',
        'created_at',
    ]

    search_fields = [
        'title',
        'content',
    ]

    readonly_fields = [
        'published_at',
        'created_at',
        'updated_at',
    ]


@admin.register(AdminLog)
class AdminLogAdmin(admin.ModelAdmin):
    """Read-only view on the audit log."""

    list_display = ['created_at', 'admin', 'action', 'target_user', 'details']
    list_filter = ['action', 'created_at']

    def has_change_permission(
        self,
        request: HttpRequest,
        obj: AdminLog | None = None,
    ) -> bool:
        """Audit rows are append-only."""
        return False

    def has_delete_permission(
        self,
        request: HttpRequest,
        obj: AdminLog | None = None,
    ) -> bool:
        """Audit rows are append-only."""
        return False
