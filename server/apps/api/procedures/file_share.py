"""Share link procedures."""

from typing import Any

from server.apps.api.rpc import CallContext, Router
from server.apps.api.serializers import serialize_file, serialize_share_link
from server.apps.circles import schemas
from server.apps.circles.logic import share_operations

router = Router('fileShare')


@router.mutation('createLink', schemas.ShareLinkCreate)
def create_link(
    context: CallContext,
    data: schemas.ShareLinkCreate,
) -> dict[str, Any]:
    link = share_operations.create_share_link(
        context.repos.circles,
        context.require_user(),
        data.file_id,
        data.expires_at,
    )
    return {'linkId': link.id, 'token': link.token}


@router.query('getByToken', schemas.ShareTokenRef, protected=False)
def get_by_token(context: CallContext, data: schemas.ShareTokenRef) -> dict[str, Any]:
    link = share_operations.resolve_share_link(context.repos.circles, data.token)
    return {
        'file': serialize_file(link.file),
        'link': serialize_share_link(link),
    }


@router.mutation('deleteLink', schemas.ShareLinkRef)
def delete_link(context: CallContext, data: schemas.ShareLinkRef) -> dict[str, bool]:
    share_operations.delete_share_link(
        context.repos.circles,
        context.require_user(),
        data.link_id,
    )
    return {'success': True}
