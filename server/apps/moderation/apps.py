"""Django app configuration for moderation app."""

from django.apps import AppConfig


class ModerationConfig(AppConfig):
    """Configuration for announcements and the admin audit log."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'server.apps.moderation'
    verbose_name = 'Moderation'
