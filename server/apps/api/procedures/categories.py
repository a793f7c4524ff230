"""Circle category procedures."""

from typing import Any

from server.apps.api.rpc import CallContext, Router
from server.apps.api.serializers import serialize_category
from server.apps.circles import schemas
from server.apps.circles.logic import category_operations

router = Router('categories')


@router.mutation('add', schemas.CategoryChange)
def add(context: CallContext, data: schemas.CategoryChange) -> dict[str, bool]:
    category_operations.add_category(
        context.repos.circles,
        context.require_user(),
        data.circle_id,
        data.category,
    )
    return {'success': True}


@router.query('getByCircle', schemas.CircleRef, protected=False)
def get_by_circle(context: CallContext, data: schemas.CircleRef) -> list[dict[str, Any]]:
    tags = category_operations.list_categories(context.repos.circles, data.circle_id)
    return [serialize_category(tag) for tag in tags]


@router.mutation('remove', schemas.CategoryChange)
def remove(context: CallContext, data: schemas.CategoryChange) -> dict[str, bool]:
    category_operations.remove_category(
        context.repos.circles,
        context.require_user(),
        data.circle_id,
        data.category,
    )
    return {'success': True}
