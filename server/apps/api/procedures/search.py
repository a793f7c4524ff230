"""Public circle discovery procedures."""

from typing import Any

from server.apps.api.rpc import CallContext, Router
from server.apps.api.serializers import serialize_circle
from server.apps.circles import schemas
from server.apps.circles.logic import search_operations

router = Router('search')


@router.query('circles', schemas.SearchQuery, protected=False)
def circles(context: CallContext, data: schemas.SearchQuery) -> list[dict[str, Any]]:
    found = search_operations.search_circles(context.repos.circles, data.query)
    return [serialize_circle(circle) for circle in found]


@router.query('byCategory', schemas.CategoryQuery, protected=False)
def by_category(
    context: CallContext,
    data: schemas.CategoryQuery,
) -> list[dict[str, Any]]:
    found = search_operations.search_by_category(
        context.repos.circles,
        data.category,
    )
    return [serialize_circle(circle) for circle in found]
