"""Circle activity procedures."""

from typing import Any

from server.apps.api.rpc import CallContext, Router
from server.apps.api.serializers import serialize_activity
from server.apps.circles import schemas
from server.apps.circles.logic import activity_operations

router = Router('activity')


@router.query('getCircleActivity', schemas.ActivityQuery, protected=False)
def get_circle_activity(
    context: CallContext,
    data: schemas.ActivityQuery,
) -> list[dict[str, Any]]:
    entries = activity_operations.get_circle_activity(
        context.repos.circles,
        context.user,
        data.circle_id,
        data.limit,
    )
    return [serialize_activity(entry) for entry in entries]
