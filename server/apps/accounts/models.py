"""Database models for accounts app."""

import secrets
from typing import Final, final

from typing_extensions import override

from django.contrib.auth.models import AbstractUser
from django.db import models

# Constants for field max lengths
_OPEN_ID_MAX_LENGTH: Final = 64
_EMAIL_MAX_LENGTH: Final = 320
_LOGIN_METHOD_MAX_LENGTH: Final = 64
_ROLE_MAX_LENGTH: Final = 16


def generate_open_id() -> str:
    """Generate an identity for users created outside the login flow.

    Returns:
        Random 32 hex chars.
    """
    return secrets.token_hex(16)


@final
class User(AbstractUser):
    """Application user.

    ``open_id`` is the stable identity issued by the external login
    provider. ``role`` decides access to administrative procedures;
    ``is_active`` is cleared when an admin disables the account.
    """

    class Role(models.TextChoices):
        """Global user role."""

        USER = 'user', 'User'
        ADMIN = 'admin', 'Admin'

    open_id = models.CharField(
        max_length=_OPEN_ID_MAX_LENGTH,
        unique=True,
        default=generate_open_id,
        help_text='Identity issued by the login provider',
    )

    name = models.TextField(
        blank=True,
        default='',
    )

    email = models.EmailField(
        max_length=_EMAIL_MAX_LENGTH,
        blank=True,
        default='',
    )

    login_method = models.CharField(
        max_length=_LOGIN_METHOD_MAX_LENGTH,
        blank=True,
        default='',
    )

    role = models.CharField(
        max_length=_ROLE_MAX_LENGTH,
        choices=Role.choices,
        default=Role.USER,
    )

    last_signed_in = models.DateTimeField(
        auto_now_add=True,
    )

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'User'  # type: ignore[mutable-override]
        verbose_name_plural = 'Users'  # type: ignore[mutable-override]
        ordering = ['-date_joined']

    @override
    def __str__(self) -> str:
        """String representation."""
        return self.name or self.username

    @property
    def is_admin(self) -> bool:
        """Whether the user may call administrative procedures."""
        return self.role == self.Role.ADMIN

    def get_display_name(self) -> str:
        """Name shown next to uploads, folders and activity.

        Returns:
            Profile name, falling back to username.
        """
        return self.name or self.username
