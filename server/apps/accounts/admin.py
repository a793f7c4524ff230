"""Django admin configuration for accounts app."""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from server.apps.accounts.models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin interface for User model."""

    list_display = [
        'username',
        'name',
        'email',
        'role',
        'is_active',
        'last_signed_in',
    ]

    list_filter = [
        'role',
        'is_active',
        'login_method',
    ]

    search_fields = [
        'username',
        'name',
        'email',
        'open_id',
    ]

    readonly_fields = [
        'open_id',
        'last_signed_in',
        'updated_at',
    ]

    fieldsets = (
        *BaseUserAdmin.fieldsets,
        ('Identity', {
            'fields': ('open_id', 'name', 'login_method', 'role'),
        }),
        ('Activity', {
            'fields': ('last_signed_in', 'updated_at'),
        }),
    )
