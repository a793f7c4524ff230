"""Session procedures."""

from typing import Any

from django.contrib.auth import logout as django_logout

from server.apps.api.rpc import CallContext, Router
from server.apps.api.serializers import serialize_user

router = Router('auth')


@router.query('me', protected=False)
def me(context: CallContext, _: None) -> dict[str, Any] | None:
    if context.user is None:
        return None
    return serialize_user(context.user)


@router.mutation('logout', protected=False)
def logout(context: CallContext, _: None) -> dict[str, bool]:
    """End the session behind the current request, if any."""
    if context.request is not None:
        django_logout(context.request)
    return {'success': True}
