"""Django app configuration for circles app."""

from typing_extensions import override

from django.apps import AppConfig


class CirclesConfig(AppConfig):
    """Configuration for circles app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'server.apps.circles'
    verbose_name = 'Circles'

    @override
    def ready(self) -> None:
        """Import signal handlers when app is ready."""
        from server.apps.circles import signals  # noqa: F401
