"""Business logic for user identities."""

import logging

from django.conf import settings

from server.apps.accounts.models import User
from server.apps.accounts.repository import UserRepository

logger = logging.getLogger(__name__)

_PROFILE_FIELDS = ('name', 'email', 'login_method')


def upsert_user(  # noqa: WPS211
    users: UserRepository,
    open_id: str,
    name: str | None = None,
    email: str | None = None,
    login_method: str | None = None,
    role: str | None = None,
) -> User:
    """Create or refresh the user behind a login-provider identity.

    Profile fields left as ``None`` keep their stored value. When no role
    is given, the identity configured as ``OWNER_OPEN_ID`` is promoted to
    admin.

    Args:
        users: User repository.
        open_id: Identity issued by the login provider.
        name: Display name.
        email: Email address.
        login_method: Name of the login provider.
        role: Explicit role to store.

    Returns:
        Stored user.

    Raises:
        ValueError: If ``open_id`` is empty.
    """
    if not open_id:
        raise ValueError('User open_id is required for upsert')

    values = {'name': name, 'email': email, 'login_method': login_method}
    fields: dict[str, object] = {
        field: values[field]
        for field in _PROFILE_FIELDS
        if values[field] is not None
    }

    if role is not None:
        fields['role'] = role
    elif open_id == settings.OWNER_OPEN_ID:
        fields['role'] = User.Role.ADMIN

    user = users.upsert(open_id, fields)
    logger.info('User signed in: %s (ID: %d)', open_id, user.id)
    return user
