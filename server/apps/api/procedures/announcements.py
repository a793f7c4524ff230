"""Public announcement procedures."""

from typing import Any

from server.apps.api.rpc import CallContext, Router
from server.apps.api.serializers import serialize_announcement
from server.apps.moderation import schemas
from server.apps.moderation.logic import admin_operations

router = Router('announcements')


@router.query('listPublished', schemas.AnnouncementPage, protected=False)
def list_published(
    context: CallContext,
    data: schemas.AnnouncementPage,
) -> list[dict[str, Any]]:
    announcements = admin_operations.list_published_announcements(
        context.repos.moderation,
        data.limit,
    )
    return [serialize_announcement(item) for item in announcements]
