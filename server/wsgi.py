"""WSGI entrypoint.

Opens the process-wide repositories before serving requests.
"""

import os

from django.apps import apps
from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'server.settings')

application = get_wsgi_application()

apps.get_app_config('api').repositories.open()  # type: ignore[attr-defined]
