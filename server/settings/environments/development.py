"""This file contains all the settings that defines the development server.

SECURITY WARNING: don't run with debug turned on in production!
"""

from server.settings.components import config
from server.settings.components.common import SECRET_KEY

# Setting the development status:

DEBUG = True

SECRET_KEY = SECRET_KEY or config(  # noqa: WPS440
    'DJANGO_DEV_SECRET_KEY',
    default='django-insecure-circles-development-key',
)

ALLOWED_HOSTS = [
    'localhost',
    '0.0.0.0',  # noqa: S104
    '127.0.0.1',
    '[::1]',
    'testserver',
]
