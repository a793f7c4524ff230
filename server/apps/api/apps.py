"""Django app configuration for api app."""

import atexit
from typing import TYPE_CHECKING

from typing_extensions import override

from django.apps import AppConfig

if TYPE_CHECKING:
    from server.apps.api.container import Repositories


class ApiConfig(AppConfig):
    """Configuration for the RPC surface.

    Owns the process-wide repositories: they are built when the app
    registry is ready, opened by the WSGI entrypoint and closed when the
    process exits.
    """

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'server.apps.api'
    verbose_name = 'API'

    repositories: 'Repositories'

    @override
    def ready(self) -> None:
        """Build repositories once the models are loaded."""
        from server.apps.api.container import build_repositories  # noqa: WPS433

        self.repositories = build_repositories()
        atexit.register(self.repositories.close)
