"""Discovery of public circles."""

from server.apps.circles.models import Circle
from server.apps.circles.repository import CircleRepository


def search_circles(circles: CircleRepository, query: str) -> list[Circle]:
    """Public circles whose name contains ``query``, ignoring case."""
    return circles.search_public_circles(query)


def search_by_category(circles: CircleRepository, category: str) -> list[Circle]:
    """Public circles tagged exactly with ``category``."""
    return circles.list_public_circles_by_category(category)
